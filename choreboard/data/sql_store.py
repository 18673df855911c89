"""
SQL storage backend.
Keeps the board document in a single row of the board_documents table.
"""
import datetime
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from choreboard.data.database import Base, create_db_engine, create_session_factory
from choreboard.data.gateway import DocumentGateway, PersistenceError, merge_document
from choreboard.data.models import BoardDocument
from choreboard.schemas.board import Category, Child

logger = logging.getLogger(__name__)

DOCUMENT_ID = "main"


class SqlDocumentGateway(DocumentGateway):
    name = "sql"

    def __init__(self, session_factory: sessionmaker, document_id: str = DOCUMENT_ID):
        super().__init__()
        self._session_factory = session_factory
        self._document_id = document_id

    @classmethod
    def from_url(cls, database_url: str) -> "SqlDocumentGateway":
        """Create the engine and the table if needed."""
        try:
            engine = create_db_engine(database_url)
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not open database: {exc}") from exc
        return cls(create_session_factory(engine))

    def fetch_document(self) -> Optional[Dict[str, Any]]:
        session = self._session_factory()
        try:
            row = session.get(BoardDocument, self._document_id)
            return row.payload if row else None
        except SQLAlchemyError as exc:
            logger.error("Failed to read board document: %s", exc)
            raise PersistenceError(f"Failed to load board data: {exc}") from exc
        finally:
            session.close()

    def write_document(self, document: Dict[str, Any]) -> None:
        self._store(lambda _stored: document)

    def save(
        self,
        children: Optional[List[Child]] = None,
        categories: Optional[List[Category]] = None,
    ) -> None:
        """Merge onto the stored row, not the cached copy, within one transaction."""
        document = self._store(lambda stored: merge_document(stored, children, categories))
        self._last_document = document

    def _store(self, build) -> Dict[str, Any]:
        session = self._session_factory()
        try:
            row = session.get(BoardDocument, self._document_id)
            document = build(row.payload if row else None)
            if row is None:
                session.add(BoardDocument(id=self._document_id, payload=document))
            else:
                row.payload = document
                row.updated_at = datetime.datetime.utcnow()
            session.commit()
            return document
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Failed to write board document: %s", exc)
            raise PersistenceError(f"Failed to save board data: {exc}") from exc
        finally:
            session.close()
