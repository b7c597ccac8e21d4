import logging

from .config import (
    API_VERSION,
    DEFAULT_PER_PAGE,
    GITLAB_TOKEN,
    GITLAB_URL,
    REQUEST_TIMEOUT_SECS,
    USER_AGENT,
)
from .exc import ValidationError
from .http import HTTPSessMixin


class GitLabApi(HTTPSessMixin):
    """
    Entry point to the GitLab REST API.

    Owns the HTTP session, authentication headers, base URL, timeout and
    default page size shared by every endpoint module it hands out.

    Example:
        with GitLabApi("https://gitlab.example.com", private_token="...") as gl:
            events = gl.resource_state_events.get_issue_state_events(
                PathString("group/project"), 7
            )
    """

    def __init__(
        self,
        host_url: str | None = None,
        private_token: str | None = None,
        *,
        oauth_token: str | None = None,
        default_per_page: int | None = None,
        timeout: float | None = None,
    ):
        """
        Args:
            host_url: Base URL of the GitLab server, defaults to GITLAB_URL
            private_token: Personal/project access token, defaults to GITLAB_TOKEN
            oauth_token: OAuth2 bearer token, used instead of private_token
            default_per_page: Page size used when a caller does not pass one
            timeout: Request timeout in seconds

        Raises:
            ValidationError: If default_per_page is not a positive int, or
                GITLAB_PER_PAGE / GITLAB_TIMEOUT_SECS are not numbers
        """
        super().__init__()
        self._logger = logging.getLogger(f"gitlab_client.{self.__class__.__name__}")

        self._host_url = (host_url or GITLAB_URL).rstrip("/")
        self._api_url = f"{self._host_url}/api/{API_VERSION}"

        if timeout is None:
            timeout = _parse_env_number("GITLAB_TIMEOUT_SECS", REQUEST_TIMEOUT_SECS, float)
        self._timeout = timeout

        per_page = default_per_page
        if per_page is None:
            per_page = _parse_env_number("GITLAB_PER_PAGE", DEFAULT_PER_PAGE, int)
        if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page <= 0:
            raise ValidationError(f"default_per_page must be a positive int, got {per_page!r}")
        self._default_per_page = per_page

        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        if oauth_token:
            headers["Authorization"] = f"Bearer {oauth_token}"
        elif private_token or GITLAB_TOKEN:
            headers["PRIVATE-TOKEN"] = private_token or GITLAB_TOKEN
        self._set_headers(headers)

        self._resource_state_events = None

    @property
    def host_url(self) -> str:
        return self._host_url

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def default_per_page(self) -> int:
        return self._default_per_page

    @property
    def resource_state_events(self):
        from .api.resource_state_events import ResourceStateEventsApi

        if self._resource_state_events is None:
            self._resource_state_events = ResourceStateEventsApi(self)
        return self._resource_state_events

    def close(self) -> None:
        self._logger.debug(f"Closing session to {self._host_url}")
        self._cleanup()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def _parse_env_number(name: str, raw: str, cast):
    try:
        return cast(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from None
