"""IBM DB2 adapter for SQLBridge."""

from sqlbridge.adapters.db2.adapter import Db2Adapter, window_bounds
from sqlbridge.adapters.db2.config import Db2Config

__all__ = ("Db2Adapter", "Db2Config", "window_bounds")
