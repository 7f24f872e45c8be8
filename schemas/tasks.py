from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, Literal, Optional
from datetime import date, datetime

from constants import DEFAULT_CATEGORY, DEFAULT_DESCRIPTION, DEFAULT_PRIORITY

Priority = Literal["low", "medium", "high"]


def parse_due_date(value):
    """Empty strings mean no deadline; ISO datetimes keep only their date part"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        return value.split("T")[0]
    return value


DueDate = Annotated[Optional[date], BeforeValidator(parse_due_date)]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(CamelModel):
    """
    Payload for POST /api/tasks.

    Every field is optional: the server fills defaults and does not
    enforce `title`/`category`, which the client validates before sending.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    due_date: DueDate = None
    category: Optional[str] = None


class TaskUpdate(CamelModel):
    """Partial patch for PUT /api/tasks/{id}. Only fields that were sent are merged."""
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    due_date: DueDate = None
    category: Optional[str] = None
    completed: Optional[bool] = None


class Task(CamelModel):
    """A persisted task record, as stored on disk and returned by the API"""
    id: str
    title: str = ""
    description: str = DEFAULT_DESCRIPTION
    priority: Priority = DEFAULT_PRIORITY
    due_date: DueDate = None
    category: str = DEFAULT_CATEGORY
    completed: bool = False
    created_at: datetime
    updated_at: datetime


class TaskFormData(CamelModel):
    """What the task form submits; blank `due_date` means no deadline."""
    title: str = ""
    description: str = ""
    priority: Priority = DEFAULT_PRIORITY
    due_date: str = ""
    category: str = DEFAULT_CATEGORY

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class TaskStats(BaseModel):
    """Aggregate counts shown above the task list"""
    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing endpoint"""
    error: str
    error_code: str
    details: dict = Field(default_factory=dict)
