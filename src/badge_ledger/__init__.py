"""Badge-Ledger: registry of non-fungible achievement badges."""

from badge_ledger.common.exceptions import (
    AlreadyBurnedError,
    BadgeError,
    BadgeNotFoundError,
    BatchTooLargeError,
    InvalidURIError,
    NotOwnerError,
    URITakenError,
)
from badge_ledger.registry.service import BadgeRegistry, BadgeView
from badge_ledger.registry.validator import is_valid_uri

__all__ = [
    "BadgeRegistry",
    "BadgeView",
    "is_valid_uri",
    "BadgeError",
    "NotOwnerError",
    "BadgeNotFoundError",
    "InvalidURIError",
    "AlreadyBurnedError",
    "BatchTooLargeError",
    "URITakenError",
]
__version__ = "0.1.0"
