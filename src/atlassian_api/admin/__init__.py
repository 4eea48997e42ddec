"""Atlassian Admin (organization) API client."""

from atlassian_api.admin.tokens import OrgKeyService, OrgTokenService, UserTokenService
from atlassian_api.client import BaseClient
from atlassian_api.config import DEFAULT_ADMIN_SITE


class AdminClient(BaseClient):
    product = 'admin'
    default_site = DEFAULT_ADMIN_SITE

    def __init__(self, site=None, http=None, config=None, auth=None):
        super().__init__(site=site, http=http, config=config, auth=auth)
        self.org_token = OrgTokenService(self)
        self.org_key = OrgKeyService(self)
        self.user_token = UserTokenService(self)


__all__ = ['AdminClient', 'OrgKeyService', 'OrgTokenService', 'UserTokenService']
