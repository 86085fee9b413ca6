"""Route group exports."""

from . import couriers, dashboard, exports, health, records

__all__ = ["couriers", "dashboard", "exports", "health", "records"]
