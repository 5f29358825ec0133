# ABOUTME: SQLAlchemy ORM models for the content repository.
# ABOUTME: Defines Category, Entry, Media, Option and ScheduledJob tables.

from datetime import UTC, datetime

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class Category(Base):
    """A category entries are filed under."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    entries: Mapped[list["Entry"]] = relationship("Entry", back_populates="category")

    def __repr__(self) -> str:
        return f"<Category {self.id}: {self.name}>"


class Entry(Base):
    """A published content entry created from a feed item."""

    __tablename__ = "entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(1000), nullable=False, index=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="publish")
    author_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    category_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=True
    )
    featured_media_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    category: Mapped[Category | None] = relationship("Category", back_populates="entries")
    media: Mapped[list["Media"]] = relationship(
        "Media",
        back_populates="entry",
        foreign_keys="Media.entry_id",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Entry {self.id}: {self.title[:50]}>"


class Media(Base):
    """An image downloaded and attached to an entry."""

    __tablename__ = "media"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entry_id: Mapped[int] = mapped_column(Integer, ForeignKey("entries.id"), nullable=False)
    source_url: Mapped[str] = mapped_column(String(2000), nullable=False)
    filename: Mapped[str] = mapped_column(String(500), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    alt_text: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    entry: Mapped[Entry] = relationship("Entry", back_populates="media", foreign_keys=[entry_id])

    def __repr__(self) -> str:
        return f"<Media {self.id}: {self.filename}>"


class Option(Base):
    """A key-value setting edited through the settings form."""

    __tablename__ = "options"

    key: Mapped[str] = mapped_column(String(191), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Option {self.key}>"


class ScheduledJob(Base):
    """A recurring job and when it is next due."""

    __tablename__ = "scheduled_jobs"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    interval_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    next_run_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_run_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<ScheduledJob {self.name} every {self.interval_seconds}s>"
