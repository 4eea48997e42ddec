"""Bitbucket repository endpoints."""

from atlassian_api.errors import NoPipelineUUIDError, NoRepositoryError, NoWorkspaceError
from atlassian_api.models.bitbucket import (
    BranchRestrictionsPageScheme,
    DefaultReviewersPageScheme,
    DeployKeysPageScheme,
    PullRequestsResponse,
    RepositoryGroupPermissionsPageScheme,
    RepositoryPageScheme,
    RepositoryPipelineRunsPageScheme,
    RepositoryPipelineRunStepsPageScheme,
    RepositoryPipelineVariablesPageScheme,
    RepositoryScheme,
)
from atlassian_api.utils import add_pagination_params

PULL_REQUEST_STATES = 'OPEN,MERGED,DECLINED,SUPERSEDED'


class RepositoryService:
    def __init__(self, connector):
        self._c = connector

    def _get_page(self, ctx, workspace, repo_slug, path, schema, opts, extra=()):
        """GET 2.0/repositories/{workspace}/{repo_slug}/{path} decoded as ``schema``."""
        if not workspace:
            raise NoWorkspaceError()
        if not repo_slug:
            raise NoRepositoryError()

        endpoint = add_pagination_params(f'2.0/repositories/{workspace}/{repo_slug}/{path}', opts, extra)
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, schema).data

    def list(self, ctx, workspace, opts=None):
        """Repositories owned by the workspace.

        GET /2.0/repositories/{workspace}
        """
        if not workspace:
            raise NoWorkspaceError()

        endpoint = add_pagination_params(f'2.0/repositories/{workspace}', opts)
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, RepositoryPageScheme).data

    def create(self, ctx, workspace, repo_slug, payload):
        """POST /2.0/repositories/{workspace}/{repo_slug}"""
        if not workspace:
            raise NoWorkspaceError()
        if not repo_slug:
            raise NoRepositoryError()

        request = self._c.new_request(ctx, 'POST', f'2.0/repositories/{workspace}/{repo_slug}', body=payload)
        return self._c.call(request, RepositoryScheme).data

    def list_branch_restrictions(self, ctx, workspace, repo_slug, opts=None):
        return self._get_page(ctx, workspace, repo_slug, 'branch-restrictions',
                              BranchRestrictionsPageScheme, opts)

    def list_default_reviewers(self, ctx, workspace, repo_slug, opts=None):
        return self._get_page(ctx, workspace, repo_slug, 'default-reviewers',
                              DefaultReviewersPageScheme, opts)

    def list_pull_requests(self, ctx, workspace, repo_slug, opts=None):
        """Pull requests in every state, not only the API's default of OPEN."""
        return self._get_page(ctx, workspace, repo_slug, 'pullrequests',
                              PullRequestsResponse, opts, [('state', PULL_REQUEST_STATES)])

    def list_deploy_keys(self, ctx, workspace, repo_slug, opts=None):
        return self._get_page(ctx, workspace, repo_slug, 'deploy-keys',
                              DeployKeysPageScheme, opts)

    def list_explicit_group_permissions(self, ctx, workspace, repo_slug, opts=None):
        return self._get_page(ctx, workspace, repo_slug, 'permissions-config/groups',
                              RepositoryGroupPermissionsPageScheme, opts)

    def list_pipeline_variables(self, ctx, workspace, repo_slug, opts=None):
        return self._get_page(ctx, workspace, repo_slug, 'pipelines_config/variables',
                              RepositoryPipelineVariablesPageScheme, opts)

    def list_pipeline_runs(self, ctx, workspace, repo_slug, opts=None):
        return self._get_page(ctx, workspace, repo_slug, 'pipelines',
                              RepositoryPipelineRunsPageScheme, opts)

    def list_pipeline_run_steps(self, ctx, workspace, repo_slug, pipeline_uuid, opts=None):
        if not workspace:
            raise NoWorkspaceError()
        if not repo_slug:
            raise NoRepositoryError()
        if not pipeline_uuid:
            raise NoPipelineUUIDError()
        return self._get_page(ctx, workspace, repo_slug, f'pipelines/{pipeline_uuid}/steps',
                              RepositoryPipelineRunStepsPageScheme, opts)
