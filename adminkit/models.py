"""Database models: a common base with id and timestamps, and roles."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, event
from sqlalchemy.orm import declarative_base

_Declarative = declarative_base()


class Base(_Declarative):
    """Abstract base giving every model a UUID id and creation/update times."""

    __abstract__ = True

    id = Column(String(36), primary_key=True, unique=True, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=False, index=True)


class Role(Base):
    """A named role that users are given."""

    __tablename__ = "roles"

    name = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(String(255), default="")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@event.listens_for(_Declarative, "before_insert", propagate=True)
def _before_create(mapper, connection, target) -> None:
    if not isinstance(target, Base):
        return
    if not target.id:
        target.id = str(uuid.uuid4())
    if target.created_at is None:
        target.created_at = datetime.now()
    if target.updated_at is None:
        target.updated_at = datetime.now()


@event.listens_for(_Declarative, "before_update", propagate=True)
def _before_update(mapper, connection, target) -> None:
    if isinstance(target, Base):
        target.updated_at = _utc_now()