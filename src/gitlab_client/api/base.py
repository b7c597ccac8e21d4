import logging
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Callable, Sequence, TypeVar
from urllib.parse import quote

import requests

from ..exc import (
    ApiError,
    DeserializationError,
    GitLabApiError,
    NetworkError,
    ValidationError,
)
from ..identifiers import Identifier, NumericId, PathString
from ..pager import Page

if TYPE_CHECKING:
    from ..client import GitLabApi


T = TypeVar("T")


class AbstractApi:
    """
    Base class of every endpoint module.

    Composes request URLs, issues requests through the owning GitLabApi's
    session, decodes JSON array bodies into items and translates every
    failure into one of the exceptions of ``gitlab_client.exc``.
    """

    def __init__(self, gitlab_api: "GitLabApi"):
        self._gitlab_api = gitlab_api
        self._logger = logging.getLogger(f"gitlab_client.{self.__class__.__name__}")

    @property
    def gitlab_api(self) -> "GitLabApi":
        return self._gitlab_api

    def default_page_size(self) -> int:
        return self._gitlab_api.default_per_page

    @staticmethod
    def resolve_identifier(identifier: Identifier) -> str:
        """
        Turn a project reference into its URL path form.

        ``NumericId(42)`` becomes ``"42"`` and ``PathString("group/proj")``
        becomes ``"group%2Fproj"``.

        Raises:
            ValidationError: If the identifier is None, empty or of an
                unsupported type
        """
        if not isinstance(identifier, (NumericId, PathString)):
            raise ValidationError(
                f"Expected a NumericId or PathString, got {identifier!r}"
            )
        return identifier.as_path_segment()

    @staticmethod
    def validate_iid(iid: int, name: str = "iid") -> int:
        if isinstance(iid, bool) or not isinstance(iid, int) or iid <= 0:
            raise ValidationError(f"{name} must be a positive int, got {iid!r}")
        return iid

    def execute(
        self,
        method: str,
        path_segments: Sequence[Any],
        query_params: dict[str, Any] | None = None,
    ) -> requests.Response:
        """
        Issue a single request and return the successful response.

        Args:
            method: HTTP method, e.g. ``"GET"``
            path_segments: Path below the API root. Identifiers are resolved,
                every other segment is percent-encoded
            query_params: Query string parameters

        Returns:
            The 2xx response

        Raises:
            ValidationError: If an identifier segment is invalid
            NetworkError: If no response was received
            ApiError: If the response status is not 2xx
        """
        url = self._build_url(path_segments)
        self._logger.debug(f"{method} {url} params={query_params}")

        try:
            rsp = self._gitlab_api.session.request(
                method,
                url,
                params=query_params,
                timeout=self._gitlab_api.timeout,
            )
        except requests.RequestException as e:
            error = self._handle_transport_error(e, method, url)
            raise error from e

        if not 200 <= rsp.status_code < 300:
            raise self._handle_api_error(rsp, method, url)

        return rsp

    def fetch_page(
        self,
        decoder: Callable[[dict], T],
        path_segments: Sequence[Any],
        page: int,
        per_page: int,
        query_params: dict[str, Any] | None = None,
    ) -> Page[T]:
        """
        GET one page of a collection and decode it.

        Raises:
            NetworkError: If no response was received
            ApiError: If the response status is not 2xx
            DeserializationError: If the body is not a JSON array of
                decodable items
        """
        params = dict(query_params or {})
        params["page"] = page
        params["per_page"] = per_page

        rsp = self.execute("GET", path_segments, params)
        items = self._decode_items(rsp, decoder)
        headers = rsp.headers

        return Page(
            items=items,
            page=_int_header(headers, "X-Page") or page,
            per_page=_int_header(headers, "X-Per-Page") or per_page,
            total_items=_int_header(headers, "X-Total"),
            total_pages=_int_header(headers, "X-Total-Pages"),
            next_page=_int_header(headers, "X-Next-Page"),
        )

    def _build_url(self, path_segments: Sequence[Any]) -> str:
        if not path_segments:
            raise ValidationError("At least one path segment is required")

        encoded = []
        for segment in path_segments:
            if isinstance(segment, Identifier):
                encoded.append(self.resolve_identifier(segment))
            elif segment is None or str(segment) == "":
                raise ValidationError(f"Empty path segment in {list(path_segments)!r}")
            else:
                encoded.append(quote(str(segment), safe=""))

        return f"{self._gitlab_api.api_url}/" + "/".join(encoded)

    def _decode_items(self, rsp: requests.Response, decoder: Callable[[dict], T]) -> list[T]:
        try:
            body = rsp.json()
        except ValueError as e:
            error = DeserializationError(
                f"Response from {rsp.url} is not valid JSON: {e}"
            )
            self._log_error("decode", error)
            raise error from e

        if not isinstance(body, list):
            error = DeserializationError(
                f"Expected a JSON array from {rsp.url}, got {type(body).__name__}"
            )
            self._log_error("decode", error)
            raise error

        try:
            return [decoder(item) for item in body]
        except Exception as e:
            error = DeserializationError(
                f"Failed to decode items from {rsp.url}: {type(e).__name__}: {e}"
            )
            self._log_error("decode", error)
            raise error from e

    def _handle_transport_error(
        self, error: requests.RequestException, method: str, url: str
    ) -> NetworkError:
        """Convert a ``requests`` failure into a NetworkError."""
        if isinstance(error, requests.Timeout):
            message = f"Request timed out: {method} {url}"
        elif isinstance(error, requests.ConnectionError):
            message = f"Connection failed: {method} {url}: {error}"
        else:
            message = f"Request failed: {method} {url}: {error}"

        translated = NetworkError(message, cause=error)
        self._log_error(f"{method} {url}", translated)
        return translated

    def _handle_api_error(
        self, rsp: requests.Response, method: str, url: str
    ) -> ApiError:
        """Convert a non-2xx response into an ApiError."""
        message = _extract_error_message(rsp)
        translated = ApiError(message, status_code=rsp.status_code)
        self._log_error(f"{method} {url}", translated)
        return translated

    def _log_error(self, operation: str, error: GitLabApiError) -> None:
        self._logger.error(
            f"GitLab API error during {operation}: {error}",
            extra={
                "operation": operation,
                "error_type": type(error).__name__,
                "status_code": error.status_code,
            },
        )


def _int_header(headers, name: str) -> int | None:
    value = headers.get(name)
    if value is None or not str(value).strip():
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _flatten_message(value: Any) -> str:
    if isinstance(value, dict):
        return "; ".join(f"{k}: {_flatten_message(v)}" for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return ", ".join(_flatten_message(v) for v in value)
    return str(value)


def _extract_error_message(rsp: requests.Response) -> str:
    try:
        body = rsp.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if value:
                return _flatten_message(value)

    try:
        return HTTPStatus(rsp.status_code).phrase
    except ValueError:
        return rsp.reason or f"HTTP {rsp.status_code}"
