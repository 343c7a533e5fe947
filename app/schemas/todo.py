"""Pydantic schemas for todo input and the priority scale."""
from datetime import date
from enum import Enum

from pydantic import BaseModel, field_validator

TEXT_MAX_LENGTH = 500


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


PRIORITY_RANK = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


class TodoCreateSchema(BaseModel):
    text: str
    due_date: date | None = None
    priority: Priority = Priority.MEDIUM

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Todo text must not be empty")
        if len(v) > TEXT_MAX_LENGTH:
            raise ValueError(f"Todo text must be at most {TEXT_MAX_LENGTH} characters")
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_date_is_none(cls, v):
        # HTML date inputs post "" when left empty
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def _blank_priority_is_default(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return Priority.MEDIUM
        if isinstance(v, str):
            return v.strip().lower()
        return v
