from abc import ABC, abstractmethod
from dataclasses import dataclass
from urllib.parse import quote

from .exc import ValidationError


class Identifier(ABC):
    """Reference to a parent resource (e.g. a project) in a request path."""

    @abstractmethod
    def as_path_segment(self) -> str: ...


@dataclass(frozen=True)
class NumericId(Identifier):
    value: int

    def as_path_segment(self) -> str:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(f"Numeric id must be an int, got {self.value!r}")
        if self.value < 0:
            raise ValidationError(f"Numeric id must not be negative, got {self.value}")
        return str(self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PathString(Identifier):
    """Namespaced path such as ``group/subgroup/project``."""

    value: str

    def as_path_segment(self) -> str:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError(f"Path must be a non-empty string, got {self.value!r}")
        return quote(self.value, safe="")

    def __str__(self) -> str:
        return self.value


ProjectRef = NumericId | PathString
