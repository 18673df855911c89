from typing import Optional

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)


class ChildUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    avatar_id: Optional[str] = Field(default=None, min_length=1)
    total_earnings: Optional[float] = None
