"""
Board management API endpoints.
Chore categories, the weekly archive workflow, and chore-name suggestions.
"""
from fastapi import APIRouter, Depends, HTTPException

from choreboard.api.deps import get_board, get_suggester
from choreboard.domain.services import BoardService
from choreboard.schemas.board import Category
from choreboard.schemas.edits import CategoryCreate
from choreboard.schemas.state import ArchiveResponse, SuggestionResponse, WeekSummaryResponse
from choreboard.services.suggestion import ChoreSuggester

router = APIRouter()


# ============================================
# CATEGORIES
# ============================================

@router.post("/api/categories", response_model=Category)
def create_category(payload: CategoryCreate, board: BoardService = Depends(get_board)):
    category, error = board.add_category(payload.name)
    if error:
        raise HTTPException(status_code=400, detail=error)
    return category


@router.delete("/api/categories/{category_id}")
def delete_category(category_id: str, confirm: bool = False, board: BoardService = Depends(get_board)):
    """
    Delete a chore category and every child's checkmarks for it.
    Irreversible; requires ?confirm=true.
    """
    error = board.delete_category(category_id, confirmed=confirm)
    if error:
        raise HTTPException(status_code=400, detail=error)
    return {"status": "ok"}


# ============================================
# WEEK ARCHIVE
# ============================================

@router.post("/api/week/archive")
def request_archive(board: BoardService = Depends(get_board)):
    """Start archiving the week. Must be confirmed, then finalized."""
    error = board.request_archive()
    if error:
        raise HTTPException(status_code=400, detail=error)
    return {"status": "ok", "archive_phase": board.archive_phase}


@router.post("/api/week/archive/confirm", response_model=WeekSummaryResponse)
def confirm_archive(board: BoardService = Depends(get_board)):
    """Confirm the archive and get the per-child summary. Nothing is reset yet."""
    summary, error = board.confirm_archive()
    if error:
        raise HTTPException(status_code=400, detail=error)
    return {"summary": summary}


@router.post("/api/week/archive/finalize", response_model=ArchiveResponse)
def finalize_archive(board: BoardService = Depends(get_board)):
    """Credit earnings, record the week, and reset every child's checkmarks."""
    children, error = board.finalize_archive()
    if error:
        raise HTTPException(status_code=400, detail=error)
    return {"children": children}


@router.post("/api/week/archive/cancel")
def cancel_archive(board: BoardService = Depends(get_board)):
    board.cancel_archive()
    return {"status": "ok"}


# ============================================
# SUGGESTIONS
# ============================================

@router.get("/api/suggestion", response_model=SuggestionResponse)
def suggest_chore(suggester: ChoreSuggester = Depends(get_suggester)):
    return {"name": suggester.suggest()}
