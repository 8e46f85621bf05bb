"""
Base Models

Declarative base shared by every gateway-config table.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all gateway-config tables."""


__all__ = ["Base"]
