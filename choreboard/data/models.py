"""
SQLAlchemy ORM model for the SQL storage backend.
"""
import datetime

from sqlalchemy import JSON, Column, DateTime, String

from choreboard.data.database import Base


class BoardDocument(Base):
    """
    The whole board stored as a single JSON document.

    Attributes:
        id: Document key (the application uses "main")
        payload: {"children": [...], "categories": [...]}, camelCase keys
        updated_at: Timestamp of the last write
    """
    __tablename__ = "board_documents"

    id = Column(String, primary_key=True)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.datetime.utcnow)
