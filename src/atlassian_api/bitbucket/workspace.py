"""Bitbucket workspace endpoints."""

from atlassian_api.errors import NoMemberIDError, NoWorkspaceError
from atlassian_api.models.bitbucket import (
    BitbucketProjectPageScheme,
    WorkspaceMembershipPageScheme,
    WorkspaceMembershipScheme,
    WorkspaceScheme,
)
from atlassian_api.utils import add_pagination_params


class WorkspaceService:
    """Workspaces, plus the permission, repository and project services nested under them."""

    def __init__(self, connector, permission=None, repository=None, project=None):
        self._c = connector
        self.permission = permission
        self.repository = repository
        self.project = project

    def get(self, ctx, workspace, opts=None):
        """GET /2.0/workspaces/{workspace}"""
        if not workspace:
            raise NoWorkspaceError()

        endpoint = add_pagination_params(f'2.0/workspaces/{workspace}', opts)
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, WorkspaceScheme).data

    def members(self, ctx, workspace, opts=None):
        """GET /2.0/workspaces/{workspace}/members"""
        if not workspace:
            raise NoWorkspaceError()

        endpoint = add_pagination_params(f'2.0/workspaces/{workspace}/members', opts)
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, WorkspaceMembershipPageScheme).data

    def membership(self, ctx, workspace, member_id):
        """Membership of one user, including the user and the workspace.

        GET /2.0/workspaces/{workspace}/members/{memberID}
        """
        if not workspace:
            raise NoWorkspaceError()
        if not member_id:
            raise NoMemberIDError()

        request = self._c.new_request(ctx, 'GET', f'2.0/workspaces/{workspace}/members/{member_id}')
        return self._c.call(request, WorkspaceMembershipScheme).data

    def projects(self, ctx, workspace, opts=None):
        """GET /2.0/workspaces/{workspace}/projects"""
        if not workspace:
            raise NoWorkspaceError()

        endpoint = add_pagination_params(f'2.0/workspaces/{workspace}/projects', opts)
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, BitbucketProjectPageScheme).data
