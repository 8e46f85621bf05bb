"""Worker API key SQLAlchemy model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class WorkerApiKey(Base):
    """Registered worker key; ``safety_enabled`` is stored as 0/1."""

    __tablename__ = "worker_keys"

    api_key: Mapped[str] = mapped_column(String(255), primary_key=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    safety_enabled: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.current_timestamp()
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<WorkerApiKey(description='{self.description}')>"


__all__ = ["WorkerApiKey"]
