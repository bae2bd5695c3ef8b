"""
User ORM model (read-only view of the `users` table).

Only the columns the ingestion service reads are mapped.

Dependencies: sqlalchemy, astra.boundary.db.base
System role: Team membership lookup
"""

import uuid

from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from astra.boundary.db.base import Base, UUIDMixin


class UserModel(Base, UUIDMixin):
    """Application user and the team it belongs to."""

    __tablename__ = "users"

    team_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), nullable=True)
