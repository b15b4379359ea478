"""
SQLAlchemy declarative base and metadata.
Constraint names follow a fixed convention so Alembic migrations stay stable.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
}


class Base(DeclarativeBase):
    """Base class for the catalog's ORM models (users, products)."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
