from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .enums import ResourceType, StateEventState


class CustomBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class EventUser(CustomBaseModel):
    id: int
    username: str
    name: str | None = None
    state: str | None = None
    avatar_url: str | None = None
    web_url: str | None = None


class ResourceStateEvent(CustomBaseModel):
    """A state transition recorded against an issue or merge request."""

    id: int
    user: EventUser | None = None
    created_at: datetime
    resource_type: ResourceType
    resource_id: int
    state: StateEventState


class IssueEvent(ResourceStateEvent):
    pass


class MergeRequestStateEvent(ResourceStateEvent):
    pass
