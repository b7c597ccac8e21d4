import json
from datetime import datetime, timedelta
from typing import Any

import requests
from requests.structures import CaseInsensitiveDict

BASE_URL = "https://gitlab.example.com"
API_URL = f"{BASE_URL}/api/v4"


def make_response(
    status_code: int = 200,
    body: Any = None,
    headers: dict[str, str] | None = None,
    raw: bytes | None = None,
    url: str = f"{API_URL}/projects",
) -> requests.Response:
    """
    Build a real requests.Response without touching the network.

    Args:
        status_code: HTTP status of the response
        body: JSON-serialisable body, ignored when raw is given
        headers: Response headers
        raw: Raw body bytes
        url: URL the response claims to come from

    Returns:
        A populated requests.Response
    """
    rsp = requests.Response()
    rsp.status_code = status_code
    rsp._content = raw if raw is not None else json.dumps(body).encode("utf-8")
    rsp.headers = CaseInsensitiveDict(headers or {})
    rsp.encoding = "utf-8"
    rsp.url = url
    rsp.reason = ""
    return rsp


def create_state_events(
    count: int,
    start_id: int = 1,
    resource_type: str = "Issue",
    resource_id: int = 253,
) -> list[dict]:
    """Create ``count`` resource state event payloads as GitLab returns them."""
    states = ["closed", "reopened"] if resource_type == "Issue" else ["closed", "reopened", "merged"]
    start_time = datetime(2024, 1, 1, 9, 30)
    events = []

    for i in range(count):
        events.append(
            {
                "id": start_id + i,
                "user": {
                    "id": 1,
                    "name": "Administrator",
                    "username": "root",
                    "state": "active",
                    "avatar_url": None,
                    "web_url": f"{BASE_URL}/root",
                },
                "created_at": (start_time + timedelta(minutes=i)).isoformat() + "Z",
                "resource_type": resource_type,
                "resource_id": resource_id,
                "state": states[i % len(states)],
            }
        )

    return events


def paginate(items: list[Any], per_page: int) -> list[requests.Response]:
    """
    Split items into GitLab-style page responses carrying the X-* pagination
    headers. The last page has an empty X-Next-Page header.
    """
    total_pages = max(1, -(-len(items) // per_page))
    responses = []

    for page in range(1, total_pages + 1):
        chunk = items[(page - 1) * per_page : page * per_page]
        headers = {
            "X-Page": str(page),
            "X-Per-Page": str(per_page),
            "X-Total": str(len(items)),
            "X-Total-Pages": str(total_pages),
            "X-Next-Page": str(page + 1) if page < total_pages else "",
            "X-Prev-Page": str(page - 1) if page > 1 else "",
        }
        responses.append(make_response(body=chunk, headers=headers))

    return responses
