from typing import Iterator

from ..identifiers import ProjectRef
from ..models import IssueEvent, MergeRequestStateEvent
from ..pager import Pager
from .base import AbstractApi


class ResourceStateEventsApi(AbstractApi):
    """
    Resource state events of issues and merge requests.

    See https://docs.gitlab.com/ee/api/resource_state_events.html
    """

    def get_issue_state_events(
        self, project: ProjectRef, issue_iid: int
    ) -> list[IssueEvent]:
        """
        Get all state events of a single issue.

        GitLab Endpoint: GET /projects/:id/issues/:issue_iid/resource_state_events

        Args:
            project: Numeric id or namespaced path of the project
            issue_iid: IID of the issue

        Returns:
            Every state event of the issue, oldest page first

        Raises:
            GitLabApiError: If any error occurs
        """
        return self.get_issue_state_events_pager(
            project, issue_iid, self.default_page_size()
        ).all()

    def get_issue_state_events_pager(
        self, project: ProjectRef, issue_iid: int, items_per_page: int
    ) -> Pager[IssueEvent]:
        """
        Get a Pager over the state events of a single issue.

        GitLab Endpoint: GET /projects/:id/issues/:issue_iid/resource_state_events

        Args:
            project: Numeric id or namespaced path of the project
            issue_iid: IID of the issue
            items_per_page: Number of events fetched per page

        Raises:
            ValidationError: If an argument is invalid
        """
        self.resolve_identifier(project)
        self.validate_iid(issue_iid, "issue_iid")
        return Pager(
            self,
            IssueEvent.model_validate,
            items_per_page,
            ["projects", project, "issues", issue_iid, "resource_state_events"],
        )

    def get_issue_state_events_stream(
        self, project: ProjectRef, issue_iid: int
    ) -> Iterator[IssueEvent]:
        """
        Lazily iterate over the state events of a single issue.

        GitLab Endpoint: GET /projects/:id/issues/:issue_iid/resource_state_events
        """
        return self.get_issue_state_events_pager(
            project, issue_iid, self.default_page_size()
        ).stream()

    def get_merge_request_state_events(
        self, project: ProjectRef, merge_request_iid: int
    ) -> list[MergeRequestStateEvent]:
        """
        Get all state events of a single merge request.

        GitLab Endpoint: GET /projects/:id/merge_requests/:merge_request_iid/resource_state_events

        Args:
            project: Numeric id or namespaced path of the project
            merge_request_iid: IID of the merge request

        Raises:
            GitLabApiError: If any error occurs
        """
        return self.get_merge_request_state_events_pager(
            project, merge_request_iid, self.default_page_size()
        ).all()

    def get_merge_request_state_events_pager(
        self, project: ProjectRef, merge_request_iid: int, items_per_page: int
    ) -> Pager[MergeRequestStateEvent]:
        """
        Get a Pager over the state events of a single merge request.

        GitLab Endpoint: GET /projects/:id/merge_requests/:merge_request_iid/resource_state_events
        """
        self.resolve_identifier(project)
        self.validate_iid(merge_request_iid, "merge_request_iid")
        return Pager(
            self,
            MergeRequestStateEvent.model_validate,
            items_per_page,
            [
                "projects",
                project,
                "merge_requests",
                merge_request_iid,
                "resource_state_events",
            ],
        )

    def get_merge_request_state_events_stream(
        self, project: ProjectRef, merge_request_iid: int
    ) -> Iterator[MergeRequestStateEvent]:
        return self.get_merge_request_state_events_pager(
            project, merge_request_iid, self.default_page_size()
        ).stream()
