"""Setting SQLAlchemy model."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Setting(Base):
    """Key-value settings row; ``value`` holds JSON text or a plain string."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Setting(key='{self.key}')>"


__all__ = ["Setting"]
