from .base import AbstractApi
from .resource_state_events import ResourceStateEventsApi


__all__ = [
    "AbstractApi",
    "ResourceStateEventsApi",
]
