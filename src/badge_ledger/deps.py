"""Dependency injection singletons for Badge-Ledger."""

from badge_ledger.common.config import get_settings
from badge_ledger.common.database import DatabaseManager
from badge_ledger.events.service import BadgeEventService
from badge_ledger.registry.service import BadgeRegistry

_db: DatabaseManager | None = None
_registry: BadgeRegistry | None = None
_events: BadgeEventService | None = None


def get_db() -> DatabaseManager:
    global _db
    if _db is None:
        _db = DatabaseManager(get_settings())
    return _db


def get_event_service() -> BadgeEventService:
    global _events
    if _events is None:
        _events = BadgeEventService(get_settings())
    return _events


def get_registry() -> BadgeRegistry:
    global _registry
    if _registry is None:
        _registry = BadgeRegistry(get_settings(), event_service=get_event_service())
    return _registry


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _db, _registry, _events
    _db = None
    _registry = None
    _events = None
