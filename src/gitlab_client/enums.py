from enum import Enum


class StateEventState(str, Enum):
    """State an issue or merge request moved into."""

    OPENED = "opened"
    CLOSED = "closed"
    REOPENED = "reopened"
    MERGED = "merged"
    LOCKED = "locked"


class ResourceType(str, Enum):
    ISSUE = "Issue"
    MERGE_REQUEST = "MergeRequest"


class PagerState(str, Enum):
    """Lifecycle position of a Pager.

    EXHAUSTED and FAILED are terminal.
    """

    CREATED = "created"
    FETCHING = "fetching"
    HAS_PAGE = "has_page"
    EXHAUSTED = "exhausted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PagerState.EXHAUSTED, PagerState.FAILED)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NETWORK = "network"
    API = "api"
    DESERIALIZATION = "deserialization"
