"""Jira Cloud API client."""

from atlassian_api.client import BaseClient
from atlassian_api.jira.comments import CommentService


class IssueService:
    def __init__(self, connector, version='2'):
        self.comment = CommentService(connector, version)


class JiraClient(BaseClient):
    """Jira needs an explicit site, e.g. https://your-domain.atlassian.net."""

    product = 'jira'

    def __init__(self, site=None, http=None, config=None, auth=None, api_version='2'):
        super().__init__(site=site, http=http, config=config, auth=auth)
        self.api_version = api_version
        self.issue = IssueService(self, api_version)


__all__ = ['CommentService', 'IssueService', 'JiraClient']
