"""Organization and user API token endpoints."""

from typing import List

from atlassian_api.errors import NoAccountIDError, NoAdminOrganizationError, NoTokenIDError
from atlassian_api.models.admin import OrgKeyPageScheme, OrgTokenPageScheme, UserTokensScheme
from atlassian_api.utils import add_query_params


def _cursor_endpoint(endpoint, params):
    if params is not None and (params.page_size > 0 or params.cursor):
        return add_query_params(endpoint, [('pageSize', params.page_size), ('cursor', params.cursor)])
    return endpoint


class OrgTokenService:
    def __init__(self, connector):
        self._c = connector

    def gets(self, ctx, org_id, params=None):
        """API tokens owned by the organization.

        GET /admin/api-access/v1/orgs/{orgID}/api-tokens
        """
        if not org_id:
            raise NoAdminOrganizationError()

        endpoint = _cursor_endpoint(f'admin/api-access/v1/orgs/{org_id}/api-tokens', params)
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, OrgTokenPageScheme).data


class OrgKeyService:
    def __init__(self, connector):
        self._c = connector

    def gets(self, ctx, org_id, params=None):
        """API keys owned by the organization.

        GET /admin/api-access/v1/orgs/{orgID}/api-keys
        """
        if not org_id:
            raise NoAdminOrganizationError()

        endpoint = _cursor_endpoint(f'admin/api-access/v1/orgs/{org_id}/api-keys', params)
        request = self._c.new_request(ctx, 'GET', endpoint)
        return self._c.call(request, OrgKeyPageScheme).data


class UserTokenService:
    def __init__(self, connector):
        self._c = connector

    def gets(self, ctx, account_id):
        """API tokens owned by a managed user.

        GET /users/{accountID}/manage/api-tokens
        """
        if not account_id:
            raise NoAccountIDError()

        request = self._c.new_request(ctx, 'GET', f'users/{account_id}/manage/api-tokens')
        return self._c.call(request, List[UserTokensScheme]).data

    def delete(self, ctx, account_id, token_id):
        """DELETE /users/{accountID}/manage/api-tokens/{tokenID}"""
        if not account_id:
            raise NoAccountIDError()
        if not token_id:
            raise NoTokenIDError()

        request = self._c.new_request(ctx, 'DELETE', f'users/{account_id}/manage/api-tokens/{token_id}')
        return self._c.call(request)
