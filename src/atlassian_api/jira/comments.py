"""Jira issue comment endpoints (plain / wiki-markup bodies)."""

from atlassian_api.errors import NoCommentIDError, NoIssueKeyOrIDError
from atlassian_api.models.jira import IssueCommentPageScheme, IssueCommentScheme
from atlassian_api.utils import add_query_params


class CommentService:
    def __init__(self, connector, version='2'):
        self._c = connector
        self.version = version

    def _endpoint(self, issue, *rest):
        return '/'.join([f'rest/api/{self.version}/issue/{issue}/comment', *rest])

    def gets(self, ctx, issue, order_by='', expand=None, start_at=0, max_results=50):
        """GET /rest/api/{version}/issue/{issueIdOrKey}/comment"""
        if not issue:
            raise NoIssueKeyOrIDError()

        params = [('startAt', start_at), ('maxResults', max_results)]
        if expand:
            params.append(('expand', ','.join(expand)))
        if order_by:
            params.append(('orderBy', order_by))

        request = self._c.new_request(ctx, 'GET', add_query_params(self._endpoint(issue), params))
        return self._c.call(request, IssueCommentPageScheme).data

    def get(self, ctx, issue, comment_id):
        """GET /rest/api/{version}/issue/{issueIdOrKey}/comment/{id}"""
        if not issue:
            raise NoIssueKeyOrIDError()
        if not comment_id:
            raise NoCommentIDError()

        request = self._c.new_request(ctx, 'GET', self._endpoint(issue, comment_id))
        return self._c.call(request, IssueCommentScheme).data

    def add(self, ctx, issue, payload, expand=None):
        """POST /rest/api/{version}/issue/{issueIdOrKey}/comment"""
        if not issue:
            raise NoIssueKeyOrIDError()

        endpoint = self._endpoint(issue)
        if expand:
            endpoint = add_query_params(endpoint, [('expand', ','.join(expand))])

        request = self._c.new_request(ctx, 'POST', endpoint, body=payload)
        return self._c.call(request, IssueCommentScheme).data

    def delete(self, ctx, issue, comment_id):
        """DELETE /rest/api/{version}/issue/{issueIdOrKey}/comment/{id}"""
        if not issue:
            raise NoIssueKeyOrIDError()
        if not comment_id:
            raise NoCommentIDError()

        request = self._c.new_request(ctx, 'DELETE', self._endpoint(issue, comment_id))
        return self._c.call(request)
