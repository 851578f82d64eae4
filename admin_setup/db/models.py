"""
SQLAlchemy ORM models.

Defines the rank, account and alias tables the admin setup command manages.
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admin_setup.core.time import utcnow
from admin_setup.db.base import Base, TimestampMixin


class Role(Base, TimestampMixin):
    """User rank. Higher ``sort`` means more privileged."""

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(191), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    accounts: Mapped[list[Account]] = relationship(back_populates="role")

    __table_args__ = (Index("ix_roles_sort", "sort"),)

    def __repr__(self) -> str:
        return f"<Role id={self.id} name={self.name!r} sort={self.sort}>"


class Account(Base, TimestampMixin):
    """Site user account."""

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(191), nullable=False)
    email: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("roles.id"), nullable=False
    )
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    has_alias: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    email_verified_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Relationships
    role: Mapped[Role] = relationship(back_populates="accounts")
    aliases: Mapped[list[AliasRecord]] = relationship(
        back_populates="account", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_accounts_role_id", "role_id"),)

    def __repr__(self) -> str:
        return f"<Account id={self.id} name={self.name!r} role_id={self.role_id}>"


class AliasRecord(Base):
    """Linked external-site identity for an account."""

    __tablename__ = "aliases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    site: Mapped[str] = mapped_column(String(64), nullable=False)
    alias: Mapped[str] = mapped_column(String(191), nullable=False)
    is_primary_alias: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    account: Mapped[Account] = relationship(back_populates="aliases")

    __table_args__ = (Index("ix_aliases_account_id", "account_id"),)
