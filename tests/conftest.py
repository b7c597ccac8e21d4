import pytest
from unittest.mock import patch

from gitlab_client import GitLabApi
from gitlab_client.api.base import AbstractApi
from tests.fixtures import BASE_URL


@pytest.fixture
def gitlab_api():
    """GitLabApi pointed at a fake host."""
    gl = GitLabApi(BASE_URL, private_token="test-token", timeout=5)
    yield gl
    gl.close()


@pytest.fixture
def mock_request(gitlab_api):
    """Replace the session's request method; set side_effect per test."""
    with patch.object(gitlab_api.session, "request") as mock:
        yield mock


@pytest.fixture
def api(gitlab_api):
    """A bare AbstractApi bound to the fake host."""
    return AbstractApi(gitlab_api)


@pytest.fixture
def decode_dict():
    """Decoder that only accepts JSON objects."""

    def _decode(item):
        if not isinstance(item, dict):
            raise TypeError(f"expected an object, got {type(item).__name__}")
        return item

    return _decode
