"""Bitbucket project permission endpoints."""

from atlassian_api.errors import NoProjectKeyError, NoWorkspaceError
from atlassian_api.models.bitbucket import ProjectGroupMembershipPageScheme, ProjectUserMembershipPageScheme
from atlassian_api.utils import add_pagination_params


class ProjectService:
    def __init__(self, connector):
        self._c = connector

    def _list(self, ctx, workspace, project_key, kind, schema, opts):
        if not workspace:
            raise NoWorkspaceError()
        if not project_key:
            raise NoProjectKeyError()

        endpoint = add_pagination_params(
            f'2.0/workspaces/{workspace}/projects/{project_key}/permissions-config/{kind}', opts)
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, schema).data

    def list_explicit_user_permissions(self, ctx, workspace, project_key, opts=None):
        """GET /2.0/workspaces/{workspace}/projects/{project_key}/permissions-config/users"""
        return self._list(ctx, workspace, project_key, 'users', ProjectUserMembershipPageScheme, opts)

    def list_explicit_group_permissions(self, ctx, workspace, project_key, opts=None):
        """GET /2.0/workspaces/{workspace}/projects/{project_key}/permissions-config/groups"""
        return self._list(ctx, workspace, project_key, 'groups', ProjectGroupMembershipPageScheme, opts)
