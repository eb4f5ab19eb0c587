"""SQLAlchemy models for the badge registry key-value tables."""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from badge_ledger.common.models import Base

LAST_BADGE_ID = "last_badge_id"

# Largest id a 64-bit signed INTEGER column can hold
MAX_BADGE_ID = 2**63 - 1


class BadgeOwnerModel(Base):
    """Ownership table: a row exists iff the badge is live."""

    __tablename__ = "badge_owners"

    badge_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    owner: Mapped[str] = mapped_column(String(255), nullable=False, index=True)


class BadgeURIModel(Base):
    """Forward metadata table: badge id to URI."""

    __tablename__ = "badge_uris"

    badge_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    uri: Mapped[str] = mapped_column(String(256), nullable=False)


class URIIndexModel(Base):
    """Reverse metadata table: URI to badge id."""

    __tablename__ = "badge_uri_index"

    uri: Mapped[str] = mapped_column(String(256), primary_key=True)
    badge_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)


class BurnedBadgeModel(Base):
    __tablename__ = "burned_badges"

    badge_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    burned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class RegistryCounterModel(Base):
    __tablename__ = "registry_counters"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
