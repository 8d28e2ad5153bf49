"""Pydantic schemas package.

Folder intent:
  common.py              — CamelModel base + HealthResponse
  vendor_application.py  — stored application record, submit/update DTOs, stats
  vendor.py              — read-only vendor showcase rows
  admin.py               — admin login / session payloads
"""
