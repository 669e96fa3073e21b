"""Pydantic schemas package.

Folder intent:
  common.py    — CamelModel / FormModel bases + HealthResponse (all schemas inherit CamelModel)
  vendor.py    — registration form, created-vendor result and the denormalized vendor view
  document.py  — document descriptors, upload results and stored documents
"""
