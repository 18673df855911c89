from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from choreboard.domain.services import ArchivePhase
from choreboard.domain.sync import SyncStatus
from choreboard.schemas.board import Category, Child


class SyncState(BaseModel):
    status: SyncStatus
    error: Optional[str] = None
    persistence_enabled: bool


class StateResponse(BaseModel):
    children: List[Child]
    categories: List[Category]
    sync: SyncState
    config_error: Optional[str] = None
    archive_phase: ArchivePhase


class MarkResponse(BaseModel):
    status: str
    reward_earned: Optional[int] = None


class ChildSummary(BaseModel):
    child_id: str
    name: str
    total_chores: int
    earnings: float
    new_total_earnings: float


class WeekSummaryResponse(BaseModel):
    summary: List[ChildSummary]


class ArchiveResponse(BaseModel):
    children: List[Child]


class ConnectionResponse(BaseModel):
    connected: bool
    metadata: Optional[Dict[str, Any]] = None


class SuggestionResponse(BaseModel):
    name: str
