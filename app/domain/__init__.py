"""Domain package — all ORM models are imported here so create_tables() registers them.

Folder intent:
  kv.py      — key-value store table (vendor applications, admin sessions)
  vendor.py  — published vendors, read-only for this service
"""

from app.domain.kv import KVEntry
from app.domain.vendor import Vendor

__all__ = [
    "KVEntry",
    "Vendor",
]
