from .events import issue, merge_request


__all__ = ["issue", "merge_request"]
