"""Atlassian Admin payloads."""

from dataclasses import dataclass
from typing import List, Optional

from pydantic import Field

from atlassian_api.models.common import Scheme


@dataclass
class OrgTokenQueryParams:
    page_size: int = 0
    cursor: str = ''


class UserTokensScheme(Scheme):
    id: Optional[str] = None
    label: Optional[str] = None
    created_at: Optional[str] = Field(None, alias='createdAt')
    last_access: Optional[str] = Field(None, alias='lastAccess')
    disabled_status: Optional[bool] = Field(None, alias='disabledStatus')
    expiry: Optional[str] = None


class OrgTokenScheme(Scheme):
    id: Optional[str] = None
    label: Optional[str] = None
    account_id: Optional[str] = Field(None, alias='accountId')
    created_at: Optional[str] = Field(None, alias='createdAt')
    last_active_at: Optional[str] = Field(None, alias='lastActiveAt')
    expires_at: Optional[str] = Field(None, alias='expiresAt')
    status: Optional[str] = None


class OrgKeyScheme(Scheme):
    id: Optional[str] = None
    name: Optional[str] = None
    created_by: Optional[str] = Field(None, alias='createdBy')
    created_at: Optional[str] = Field(None, alias='createdAt')
    expires_at: Optional[str] = Field(None, alias='expiresAt')
    status: Optional[str] = None


class CursorLinksScheme(Scheme):
    self_: Optional[str] = Field(None, alias='self')
    prev: Optional[str] = None
    next: Optional[str] = None


class OrgTokenPageScheme(Scheme):
    data: List[OrgTokenScheme] = []
    links: Optional[CursorLinksScheme] = None


class OrgKeyPageScheme(Scheme):
    data: List[OrgKeyScheme] = []
    links: Optional[CursorLinksScheme] = None
