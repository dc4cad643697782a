"""SQLAlchemy ORM models for risk configuration revisions."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, JSON, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class RiskConfigModel(Base):
    """
    One persisted risk configuration revision.

    The version is the primary key, so two writers racing for the same
    next revision cannot both succeed. Rows are never updated or deleted.
    """

    __tablename__ = "risk_configs"

    version: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
