"""Routers package — HTTP endpoint definitions.

Files:
  vendor_applications.py  — /vendor-applications (public submit, admin list/update/stats)
  vendors.py              — /vendors (public showcase, read-only)
  admin.py                — /admin/login, /admin/session, /admin/logout

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to app/services/.
"""
