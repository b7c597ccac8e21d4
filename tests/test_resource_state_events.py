from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from gitlab_client import GitLabApi
from gitlab_client.enums import PagerState, ResourceType, StateEventState
from gitlab_client.exc import ApiError, DeserializationError, ValidationError
from gitlab_client.identifiers import NumericId, PathString
from gitlab_client.models import IssueEvent, MergeRequestStateEvent
from tests.fixtures import (
    API_URL,
    BASE_URL,
    create_state_events,
    make_response,
    paginate,
)


@pytest.fixture
def events_api(gitlab_api):
    return gitlab_api.resource_state_events


def test_get_issue_state_events_returns_models(events_api, mock_request):
    mock_request.side_effect = paginate(create_state_events(3), 20)

    events = events_api.get_issue_state_events(PathString("group/proj"), 11)

    assert [e.id for e in events] == [1, 2, 3]
    assert all(isinstance(e, IssueEvent) for e in events)
    first = events[0]
    assert first.state is StateEventState.CLOSED
    assert first.resource_type is ResourceType.ISSUE
    assert first.resource_id == 253
    assert first.user.username == "root"
    assert first.created_at == datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)

    mock_request.assert_called_once_with(
        "GET",
        f"{API_URL}/projects/group%2Fproj/issues/11/resource_state_events",
        params={"page": 1, "per_page": 20},
        timeout=5,
    )


def test_get_merge_request_state_events_uses_mr_path(events_api, mock_request):
    payload = create_state_events(4, resource_type="MergeRequest")
    mock_request.side_effect = paginate(payload, 20)

    events = events_api.get_merge_request_state_events(NumericId(42), 3)

    assert all(isinstance(e, MergeRequestStateEvent) for e in events)
    assert [e.state for e in events] == [
        StateEventState.CLOSED,
        StateEventState.REOPENED,
        StateEventState.MERGED,
        StateEventState.CLOSED,
    ]
    assert mock_request.call_args.args[1] == (
        f"{API_URL}/projects/42/merge_requests/3/resource_state_events"
    )


def test_issue_pager_fetches_nothing_until_used(events_api, mock_request):
    pager = events_api.get_issue_state_events_pager(NumericId(1), 2, 10)

    mock_request.assert_not_called()
    assert pager.items_per_page == 10
    assert pager.state is PagerState.CREATED


def test_issue_pager_walks_pages(events_api, mock_request):
    payload = create_state_events(25)
    mock_request.side_effect = paginate(payload, 20)
    pager = events_api.get_issue_state_events_pager(NumericId(1), 2, 20)

    assert len(pager.next_page()) == 20
    assert len(pager.next_page()) == 5
    assert pager.next_page() == []
    assert pager.total_items == 25


def test_merge_request_pager_uses_given_page_size(events_api, mock_request):
    mock_request.side_effect = paginate(create_state_events(5, resource_type="MergeRequest"), 2)
    pager = events_api.get_merge_request_state_events_pager(PathString("a/b"), 9, 2)

    assert len(pager.all()) == 5
    assert mock_request.call_count == 3
    assert mock_request.call_args.kwargs["params"]["per_page"] == 2


def test_issue_stream_is_lazy_and_complete(events_api, mock_request):
    payload = create_state_events(30)
    mock_request.side_effect = paginate(payload, 20)

    stream = events_api.get_issue_state_events_stream(NumericId(1), 2)
    mock_request.assert_not_called()

    assert [e.id for e in stream] == [e["id"] for e in payload]
    assert mock_request.call_count == 2


def test_merge_request_stream(events_api, mock_request):
    mock_request.side_effect = paginate(create_state_events(2, resource_type="MergeRequest"), 20)

    events = list(events_api.get_merge_request_state_events_stream(NumericId(1), 2))

    assert len(events) == 2


def test_default_page_size_follows_client():
    with GitLabApi(BASE_URL, default_per_page=50, timeout=5) as gl:
        with patch.object(gl.session, "request") as mock:
            mock.return_value = make_response(body=[])
            gl.resource_state_events.get_issue_state_events(NumericId(1), 1)

    assert mock.call_args.kwargs["params"]["per_page"] == 50


@pytest.mark.parametrize("iid", [0, -1, None, "5", True])
def test_invalid_iid_raises_validation_error(events_api, mock_request, iid):
    with pytest.raises(ValidationError):
        events_api.get_issue_state_events(NumericId(1), iid)
    with pytest.raises(ValidationError):
        events_api.get_merge_request_state_events_pager(NumericId(1), iid, 20)

    mock_request.assert_not_called()


@pytest.mark.parametrize("project", [None, PathString(""), 42, "group/proj"])
def test_invalid_project_raises_validation_error(events_api, mock_request, project):
    with pytest.raises(ValidationError):
        events_api.get_issue_state_events_pager(project, 1, 20)

    mock_request.assert_not_called()


def test_missing_issue_raises_api_error(events_api, mock_request):
    mock_request.return_value = make_response(404, {"message": "404 Issue Not Found"})

    with pytest.raises(ApiError) as exc_info:
        events_api.get_issue_state_events(NumericId(1), 999)

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "404 Issue Not Found"


def test_unknown_state_raises_deserialization_error(events_api, mock_request):
    payload = create_state_events(1)
    payload[0]["state"] = "teleported"
    mock_request.return_value = make_response(body=payload)

    with pytest.raises(DeserializationError):
        events_api.get_issue_state_events(NumericId(1), 1)


def test_extra_fields_are_ignored(events_api, mock_request):
    payload = create_state_events(1)
    payload[0]["source_commit"] = "abc123"
    mock_request.return_value = make_response(body=payload)

    events = events_api.get_issue_state_events(NumericId(1), 1)

    assert events[0].id == 1
