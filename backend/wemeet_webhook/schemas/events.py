from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CallbackBody(BaseModel):
    model_config = ConfigDict(extra="allow")

    data: str | None = Field(None, description="Encoded event payload")


class Event(BaseModel):
    model_config = ConfigDict(extra="allow")

    event: str = Field(..., description="Event type, e.g. meeting.created")
    trace_id: str | None = None
    payload: Any = None


class MeetingInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    meeting_id: str | None = None
    meeting_code: str | None = None
    subject: str | None = None
    meeting_type: int | None = None
    start_time: int | None = None
    end_time: int | None = None
    creator: dict[str, Any] | None = None
