from .api import AbstractApi, ResourceStateEventsApi
from .client import GitLabApi
from .enums import ErrorKind, PagerState, ResourceType, StateEventState
from .exc import (
    ApiError,
    DeserializationError,
    GitLabApiError,
    NetworkError,
    ValidationError,
)
from .identifiers import Identifier, NumericId, PathString, ProjectRef
from .models import EventUser, IssueEvent, MergeRequestStateEvent, ResourceStateEvent
from .pager import Page, Pager


__version__ = "0.1.0"

__all__ = [
    # Client
    "GitLabApi",
    "AbstractApi",
    "ResourceStateEventsApi",
    # Pagination
    "Page",
    "Pager",
    "PagerState",
    # Identifiers
    "Identifier",
    "NumericId",
    "PathString",
    "ProjectRef",
    # Models
    "EventUser",
    "ResourceStateEvent",
    "IssueEvent",
    "MergeRequestStateEvent",
    "ResourceType",
    "StateEventState",
    # Exceptions
    "ErrorKind",
    "GitLabApiError",
    "ValidationError",
    "NetworkError",
    "ApiError",
    "DeserializationError",
]
