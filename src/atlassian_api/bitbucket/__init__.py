"""Bitbucket Cloud API client."""

from atlassian_api.bitbucket.permissions import WorkspacePermissionService
from atlassian_api.bitbucket.project import ProjectService
from atlassian_api.bitbucket.repository import RepositoryService
from atlassian_api.bitbucket.workspace import WorkspaceService
from atlassian_api.client import BaseClient
from atlassian_api.config import DEFAULT_BITBUCKET_SITE


class BitbucketClient(BaseClient):
    product = 'bitbucket'
    default_site = DEFAULT_BITBUCKET_SITE

    def __init__(self, site=None, http=None, config=None, auth=None):
        super().__init__(site=site, http=http, config=config, auth=auth)
        self.workspace = WorkspaceService(
            self,
            permission=WorkspacePermissionService(self),
            repository=RepositoryService(self),
            project=ProjectService(self),
        )


__all__ = [
    'BitbucketClient',
    'ProjectService',
    'RepositoryService',
    'WorkspacePermissionService',
    'WorkspaceService',
]
