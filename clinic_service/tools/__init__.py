"""
Tools Package

Integration helpers used by the API layer.

Service Clients (with connection pooling and graceful shutdown):
- clinic_store_client: Clinic data store HTTP client

Utility Tools:
- time_tool: Lenient date/time parsing for store documents

NOTE: Clients are NOT imported eagerly to avoid connection side effects at module import.
Import specific clients as needed: `from clinic_service.tools import clinic_store_client`
"""

# Export utility tools (no connection side effects)
from clinic_service.tools import time_tool

__all__ = [
    "time_tool",
]
