"""Base model for all other models to inherit from."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base for all models."""

    pass
