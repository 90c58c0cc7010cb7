"""Pydantic v2 schemas for the Rules API."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field


class RuleResponse(BaseModel):
    id: UUID
    question: str
    answer: str
    keywords: List[str]
    is_active: bool
    usage_count: int
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RuleCreateRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=2000)
    answer: str = Field(..., min_length=1, max_length=8000)
    # Either a list or the admin form's comma-separated string
    keywords: Union[List[str], str] = Field(default_factory=list)
    is_active: bool = True
    created_by: Optional[str] = Field(default=None, max_length=128)


class RulePatchRequest(BaseModel):
    question: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    answer: Optional[str] = Field(default=None, min_length=1, max_length=8000)
    keywords: Optional[Union[List[str], str]] = None
    is_active: Optional[bool] = None


class MatchRequest(BaseModel):
    message: str = Field(..., max_length=8000)


class MatchResponse(BaseModel):
    rule: RuleResponse
    reason: str
