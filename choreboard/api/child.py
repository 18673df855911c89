"""
Child-facing API endpoints.
Checkmarks per chore category, plus edits to a child's lane.
"""
from fastapi import APIRouter, Depends, HTTPException

from choreboard.api.deps import get_board
from choreboard.domain.services import CHILD_NOT_FOUND, BoardService
from choreboard.schemas.edits import ChildUpdate
from choreboard.schemas.state import MarkResponse

router = APIRouter()


@router.post("/api/child/{child_id}/chores/{category_id}/mark", response_model=MarkResponse)
def mark_chore(child_id: str, category_id: str, board: BoardService = Depends(get_board)):
    """
    Add a checkmark for a child in a chore category.
    Unknown child or category ids change nothing.

    Returns:
        Status, and reward_earned when this checkmark reached a new reward tier
    """
    reward, error = board.mark_chore(child_id, category_id)
    if error:
        raise HTTPException(status_code=400, detail=error)
    return {"status": "ok", "reward_earned": reward}


@router.post("/api/child/{child_id}/chores/{category_id}/unmark")
def unmark_chore(child_id: str, category_id: str, board: BoardService = Depends(get_board)):
    """Remove a checkmark. Does nothing when the count is already zero."""
    error = board.unmark_chore(child_id, category_id)
    if error:
        raise HTTPException(status_code=400, detail=error)
    return {"status": "ok"}


@router.patch("/api/child/{child_id}")
def update_child(child_id: str, payload: ChildUpdate, board: BoardService = Depends(get_board)):
    """
    Rename a child, change their avatar, or overwrite their displayed total.

    Args:
        child_id: ID of the child to edit
        payload: Fields to change; omitted fields are kept
    """
    error = board.update_child(
        child_id,
        name=payload.name,
        avatar_id=payload.avatar_id,
        total_earnings=payload.total_earnings,
    )
    if error:
        raise HTTPException(status_code=404 if error == CHILD_NOT_FOUND else 400, detail=error)
    return {"status": "ok"}
