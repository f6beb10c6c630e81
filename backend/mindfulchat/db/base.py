"""
Declarative base and shared column mixins.
"""
from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base
from mindfulchat.core.utils import utcnow

Base = declarative_base()


class TimestampMixin:
    """created_at / updated_at columns maintained by SQLAlchemy."""
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class BaseModel(TimestampMixin, Base):
    """Abstract base for tables with an integer surrogate key."""
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
