"""Routers package — HTTP endpoint definitions.

Files:
  dependencies.py  — FastAPI providers for the engine, services and storage
  v1/              — Versioned API routes (/api/v1/*)
"""
