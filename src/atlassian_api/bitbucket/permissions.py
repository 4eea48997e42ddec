"""Bitbucket workspace permission endpoints."""

from atlassian_api.errors import NoRepositoryError, NoWorkspaceError
from atlassian_api.models.bitbucket import RepositoryPermissionPageScheme, WorkspaceMembershipPageScheme
from atlassian_api.utils import add_pagination_params


def _filters(query='', sort=''):
    pairs = []
    if query:
        pairs.append(('q', query))
    if sort:
        pairs.append(('sort', sort))
    return pairs


class WorkspacePermissionService:
    def __init__(self, connector):
        self._c = connector

    def members(self, ctx, workspace, query='', opts=None):
        """Members of a workspace and their permission levels.

        GET /2.0/workspaces/{workspace}/permissions
        """
        if not workspace:
            raise NoWorkspaceError()

        endpoint = add_pagination_params(f'2.0/workspaces/{workspace}/permissions', opts, _filters(query))
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, WorkspaceMembershipPageScheme).data

    def repositories(self, ctx, workspace, query='', sort='', opts=None):
        """Effective permission of every user on every repository. Admin only.

        GET /2.0/workspaces/{workspace}/permissions/repositories
        """
        if not workspace:
            raise NoWorkspaceError()

        endpoint = add_pagination_params(
            f'2.0/workspaces/{workspace}/permissions/repositories', opts, _filters(query, sort))
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, RepositoryPermissionPageScheme).data

    def repository(self, ctx, workspace, repository, sort='', opts=None):
        """GET /2.0/workspaces/{workspace}/permissions/repositories/{repo_slug}"""
        if not workspace:
            raise NoWorkspaceError()
        if not repository:
            raise NoRepositoryError()

        endpoint = add_pagination_params(
            f'2.0/workspaces/{workspace}/permissions/repositories/{repository}', opts, _filters(sort=sort))
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, RepositoryPermissionPageScheme).data
