import json
import logging
import sys

import click

from ...client import GitLabApi
from ...config import GITLAB_URL
from ...exc import GitLabApiError
from ...identifiers import NumericId, PathString, ProjectRef
from ...models import ResourceStateEvent

logger = logging.getLogger("gitlab_client.commands.events")


def parse_project_ref(value: str) -> ProjectRef:
    """Digits-only references are numeric ids, anything else a namespaced path."""
    value = value.strip()
    if value.isdigit():
        return NumericId(int(value))
    return PathString(value)


def _format_event(event: ResourceStateEvent) -> str:
    username = event.user.username if event.user else "unknown"
    return f"{event.created_at.isoformat()} {event.state.value} by {username}"


def _common_options(func):
    options = [
        click.option(
            "--project",
            required=True,
            help="Project id or namespaced path (e.g. 42 or group/project)",
        ),
        click.option("--iid", type=int, required=True, help="IID within the project"),
        click.option(
            "--per-page",
            type=int,
            default=None,
            help="Events fetched per request (defaults to GITLAB_PER_PAGE)",
        ),
        click.option("--json", "as_json", is_flag=True, help="Print a JSON array"),
        click.option(
            "--url",
            envvar="GITLAB_URL",
            default=GITLAB_URL,
            show_default=True,
            help="GitLab server URL (or set GITLAB_URL env var)",
        ),
        click.option(
            "--token",
            envvar="GITLAB_TOKEN",
            help="Access token (or set GITLAB_TOKEN env var)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _print_events(kind, project, iid, per_page, as_json, url, token):
    try:
        with GitLabApi(url, token) as gl:
            api = gl.resource_state_events
            per_page = per_page if per_page is not None else api.default_page_size()
            project_ref = parse_project_ref(project)

            if kind == "issue":
                pager = api.get_issue_state_events_pager(project_ref, iid, per_page)
            else:
                pager = api.get_merge_request_state_events_pager(
                    project_ref, iid, per_page
                )

            if as_json:
                events = [e.model_dump(mode="json") for e in pager.all()]
                click.echo(json.dumps(events, indent=2))
            else:
                for event in pager.stream():
                    click.echo(_format_event(event))
    except GitLabApiError as e:
        click.echo(f"Error: {e}", err=True)
        logger.debug("Request failed", exc_info=True)
        sys.exit(1)


@click.command(name="issue")
@_common_options
def issue(project, iid, per_page, as_json, url, token):
    """
    Print the state events of an issue.

    Examples:
      gitlab-events issue --project group/project --iid 12

      gitlab-events issue --project 42 --iid 12 --per-page 100 --json
    """
    _print_events("issue", project, iid, per_page, as_json, url, token)


@click.command(name="merge-request")
@_common_options
def merge_request(project, iid, per_page, as_json, url, token):
    """
    Print the state events of a merge request.

    Examples:
      gitlab-events merge-request --project group/project --iid 3
    """
    _print_events("merge_request", project, iid, per_page, as_json, url, token)
