"""
Persistence gateway contract.
A gateway stores the whole board as one JSON document. Concrete backends only
implement fetch_document/write_document; seeding, validation and merge-on-save
live here.
"""
import copy
import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from choreboard.domain.seed import default_board
from choreboard.schemas.board import BoardData, Category, Child

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when the backing store cannot be read or written."""
    pass


class SeedWriteError(PersistenceError):
    """The default board was built but could not be stored; `board` is still usable."""

    def __init__(self, message: str, board: BoardData):
        super().__init__(message)
        self.board = board


def parse_document(document: Any) -> BoardData:
    """
    Turn a stored document into BoardData.
    A document without both arrays, or with invalid records, yields an empty board.
    """
    if (
        not isinstance(document, dict)
        or not isinstance(document.get("children"), list)
        or not isinstance(document.get("categories"), list)
    ):
        logger.warning("Stored board document is malformed, using an empty board")
        return BoardData()
    try:
        return BoardData.model_validate(document)
    except ValidationError as exc:
        logger.warning("Stored board document failed validation, using an empty board: %s", exc)
        return BoardData()


def merge_document(
    document: Optional[Dict[str, Any]],
    children: Optional[Sequence[Child]] = None,
    categories: Optional[Sequence[Category]] = None,
) -> Dict[str, Any]:
    merged = copy.deepcopy(document) if isinstance(document, dict) else {}
    merged.setdefault("children", [])
    merged.setdefault("categories", [])
    if children is not None:
        merged["children"] = [child.model_dump(by_alias=True) for child in children]
    if categories is not None:
        merged["categories"] = [category.model_dump(by_alias=True) for category in categories]
    return merged


class DocumentGateway:
    """Base class for board storage backends."""

    name = "document"

    def __init__(self) -> None:
        self._last_document: Optional[Dict[str, Any]] = None

    def fetch_document(self) -> Optional[Dict[str, Any]]:
        """Return the stored document, or None when it does not exist yet."""
        raise NotImplementedError

    def write_document(self, document: Dict[str, Any]) -> None:
        raise NotImplementedError

    def load(self) -> BoardData:
        """
        Read the board.
        When nothing has been stored yet the default board is written and returned.
        If that write fails, SeedWriteError carries the default board.
        """
        document = self.fetch_document()
        if not document:
            logger.info("No board document in %s storage, seeding defaults", self.name)
            board = default_board()
            seeded = board.to_document()
            try:
                self.write_document(seeded)
            except PersistenceError as exc:
                logger.error("Failed to store the default board: %s", exc)
                raise SeedWriteError(str(exc), board) from exc
            self._last_document = seeded
            return board

        board = parse_document(document)
        self._last_document = document
        return board

    def save(
        self,
        children: Optional[List[Child]] = None,
        categories: Optional[List[Category]] = None,
    ) -> None:
        """Store the given parts; parts left as None keep their last stored value."""
        document = merge_document(self._last_document, children, categories)
        self.write_document(document)
        self._last_document = document

    def test_connection(self) -> bool:
        try:
            self.fetch_document()
        except PersistenceError:
            return False
        return True

    def metadata(self) -> Optional[Dict[str, Any]]:
        """Backend-specific details about the stored document, if the backend has any."""
        return None
