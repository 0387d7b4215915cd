"""
Declarative base and shared columns for all models.
"""
from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import declarative_base
from app.core.utils import utcnow

Base = declarative_base()

# MySQL DATETIME drops fractional seconds unless fsp is given
Timestamp = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")


class BaseModel(Base):
    """Abstract model with id and audit timestamps."""
    __abstract__ = True
    # AUTOINCREMENT on SQLite so ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    created_at = Column(Timestamp, default=utcnow, nullable=False)
    updated_at = Column(Timestamp, default=utcnow, nullable=False)
