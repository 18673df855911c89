"""
Public state API endpoints.
Returns the whole board plus the persistence status for the board display.
"""
from fastapi import APIRouter, Depends

from choreboard.api.deps import get_board
from choreboard.domain.services import BoardService
from choreboard.schemas.state import ConnectionResponse, StateResponse

router = APIRouter()


@router.get("/api/state", response_model=StateResponse)
def get_state(board: BoardService = Depends(get_board)):
    """
    Get the complete board for display.

    Returns:
        StateResponse with children, categories, sync status (idle/loading/
        saving/saved/error), any configuration error, and the archive phase
    """
    return board.snapshot()


@router.get("/api/connection", response_model=ConnectionResponse)
def check_connection(board: BoardService = Depends(get_board)):
    """
    Check that the storage backend can currently be reached.

    Returns:
        ConnectionResponse with the connection flag and, when the backend
        reports any, metadata about the stored document
    """
    return board.connection_info()
