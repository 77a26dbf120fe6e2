"""SQLAlchemy ORM models for accounts, catalog and activity log."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class User(Base):
    """User table - student and admin accounts."""

    __tablename__ = "user"
    __table_args__ = (Index("idx_user_branch", "branch"),)

    username: Mapped[str] = mapped_column(Text, primary_key=True)
    # Plaintext credential, compared directly at login
    password: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default="student")
    branch: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    activities: Mapped[list["Activity"]] = relationship("Activity", back_populates="user")


class Pdf(Base):
    """Pdf table - catalog of uploaded course documents."""

    __tablename__ = "pdf"
    __table_args__ = (
        Index("idx_pdf_taxonomy", "regulation", "year", "subject"),
        Index("idx_pdf_uploaded", "uploaded_at"),
    )

    pdf_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    regulation: Mapped[str | None] = mapped_column(String(8), nullable=True)
    year: Mapped[str | None] = mapped_column(String(8), nullable=True)
    pdf_url: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Activity(Base):
    """Activity table - append-only view/download log."""

    __tablename__ = "activity"
    __table_args__ = (
        Index("idx_activity_branch_ts", "branch", "timestamp"),
        Index("idx_activity_user_ts", "username", "timestamp"),
    )

    activity_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(
        Text, ForeignKey("user.username"), nullable=False
    )
    # No foreign key: activity rows outlive deleted documents
    pdf_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    action: Mapped[str] = mapped_column(String(16), nullable=False)
    # Copied from the user at logging time
    branch: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[str] = mapped_column(String(8), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="activities")
