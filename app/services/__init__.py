"""Services package — all business logic lives here, never in routers.

Files:
  vendor_application.py  — application intake, review updates, statistics
  notification.py        — best-effort Resend email on new applications
  admin_session.py       — admin password login and bearer-token sessions
  vendor.py              — read-only vendor showcase listing

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
