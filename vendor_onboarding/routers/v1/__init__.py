"""v1 router package — all /api/v1/* endpoints live here.

Files:
  vendors.py    — vendor registration and reads
  documents.py  — document upload and attachment

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to vendor_onboarding/services/.
"""
