"""Jira Cloud payloads (REST API v2, rich-text comments)."""

from typing import List, Optional

from pydantic import Field

from atlassian_api.models.common import Scheme


class UserScheme(Scheme):
    account_id: Optional[str] = Field(None, alias='accountId')
    email_address: Optional[str] = Field(None, alias='emailAddress')
    display_name: Optional[str] = Field(None, alias='displayName')
    active: Optional[bool] = None
    time_zone: Optional[str] = Field(None, alias='timeZone')
    account_type: Optional[str] = Field(None, alias='accountType')


class CommentVisibilityScheme(Scheme):
    type: Optional[str] = None
    value: Optional[str] = None


class IssueCommentScheme(Scheme):
    id: Optional[str] = None
    body: Optional[str] = None
    rendered_body: Optional[str] = Field(None, alias='renderedBody')
    author: Optional[UserScheme] = None
    update_author: Optional[UserScheme] = Field(None, alias='updateAuthor')
    created: Optional[str] = None
    updated: Optional[str] = None
    jsd_public: Optional[bool] = Field(None, alias='jsdPublic')
    visibility: Optional[CommentVisibilityScheme] = None


class IssueCommentPageScheme(Scheme):
    start_at: Optional[int] = Field(None, alias='startAt')
    max_results: Optional[int] = Field(None, alias='maxResults')
    total: Optional[int] = None
    comments: List[IssueCommentScheme] = []


class CommentPayloadScheme(Scheme):
    body: str
    visibility: Optional[CommentVisibilityScheme] = None
