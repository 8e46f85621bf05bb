"""Per-model quota SQLAlchemy model."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ModelConfig(Base):
    """Quota configuration for one upstream model."""

    __tablename__ = "models_config"

    model_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    daily_quota: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    individual_quota: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<ModelConfig(model_id='{self.model_id}', category='{self.category}')>"


__all__ = ["ModelConfig"]
