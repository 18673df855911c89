"""
Board records shared by the domain, the persistence gateways, and the API.
Field aliases match the stored JSON document (camelCase keys).
"""
import math
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_number(value: Any) -> float:
    """Read a stored amount, treating anything non-numeric as 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class Category(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str


class WeeklyArchive(BaseModel):
    """One completed week for a child. Never modified after creation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    week_of: str = Field(alias="weekOf")
    total_chores: int = Field(alias="totalChores", ge=0)
    earnings: float = Field(ge=0)


class Child(BaseModel):
    """
    A child on the board.

    Attributes:
        id: Unique identifier
        name: Display name
        avatar_id: Avatar picked for the child's lane
        chores: Current week's count per category id (zero counts are never stored)
        total_earnings: Cumulative earnings over all archived weeks
        archive: Archived weeks, newest first
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    avatar_id: str = Field(default="avatar1", alias="avatarId")
    chores: Dict[str, int] = Field(default_factory=dict)
    total_earnings: float = Field(default=0.0, alias="totalEarnings")
    archive: List[WeeklyArchive] = Field(default_factory=list)

    @field_validator("chores", mode="before")
    @classmethod
    def drop_empty_counts(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            # Fractional counts are truncated; anything non-numeric or below one is dropped.
            return {
                key: int(count)
                for key, count in value.items()
                if isinstance(count, (int, float))
                and not isinstance(count, bool)
                and math.isfinite(count)
                and count >= 1
            }
        return value

    @field_validator("total_earnings", mode="before")
    @classmethod
    def coerce_total(cls, value: Any) -> float:
        return as_number(value)

    @field_validator("archive", mode="before")
    @classmethod
    def default_archive(cls, value: Any) -> Any:
        return [] if value is None else value


class BoardData(BaseModel):
    """The persisted document: every child and every category."""

    children: List[Child] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        return {
            "children": [child.model_dump(by_alias=True) for child in self.children],
            "categories": [category.model_dump(by_alias=True) for category in self.categories],
        }
