"""SQLAlchemy ORM models for the spaces and space_resources tables."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin


class SpaceModel(Base, TimestampMixin):
    """ORM model for spaces table.

    Spaces are created by the space management service; the owner is
    fixed at creation.
    """

    __tablename__ = "spaces"

    id: Mapped[UUID] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("identities.id"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<SpaceModel(id={self.id}, name={self.name})>"


class SpaceResourceModel(Base, TimestampMixin):
    """ORM model for space_resources table.

    Links a space (1:1) to its protected resource, user policy and
    permission on the authorization server.
    """

    __tablename__ = "space_resources"

    id: Mapped[UUID] = mapped_column(primary_key=True)
    space_id: Mapped[UUID] = mapped_column(
        ForeignKey("spaces.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    resource_id: Mapped[str] = mapped_column(String(255), nullable=False)
    policy_id: Mapped[str] = mapped_column(String(255), nullable=False)
    permission_id: Mapped[str] = mapped_column(String(255), nullable=False)

    space: Mapped[SpaceModel] = relationship(lazy="raise")

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<SpaceResourceModel(space_id={self.space_id}, "
            f"policy_id={self.policy_id})>"
        )
