from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class LoadingState(str, Enum):
    """Lifecycle of a generation session"""
    LOADING_SPEC = "loading-spec"
    LOADING_CODE = "loading-code"
    READY = "ready"
    ERROR = "error"

    @property
    def is_busy(self) -> bool:
        return self in (LoadingState.LOADING_SPEC, LoadingState.LOADING_CODE)


class SessionError(BaseModel):
    """Failure recorded when a session enters the error state"""
    stage: str  # "spec" or "code"
    message: str  # human-readable
    detail: str  # original error message
    error_type: str


class SessionSnapshot(BaseModel):
    """Consistent view of a session handed to subscribers"""
    content_basis: str
    spec: str = ""
    code: str = ""
    state: LoadingState
    error: Optional[SessionError] = None
    busy: bool
    generation_id: int = 0


class Example(BaseModel):
    """Pre-seeded example: a video with an already generated spec and code"""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    url: str
    subject: str = ""
    channel: str = ""
    age_range: str = Field(default="", alias="ageRange")
    grade: str = ""
    spec: str
    code: str
