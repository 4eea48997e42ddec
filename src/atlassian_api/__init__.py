"""Python client for the Atlassian Admin, Bitbucket Cloud and Jira Cloud REST APIs."""

from atlassian_api.admin import AdminClient
from atlassian_api.auth import Authentication, Credentials
from atlassian_api.bitbucket import BitbucketClient
from atlassian_api.client import APIRequest, APIResponse, BaseClient, Connector
from atlassian_api.config import ClientConfig
from atlassian_api.context import Context
from atlassian_api.errors import (
    APIError,
    AtlassianError,
    BadRequestError,
    CancelledError,
    DeadlineExceededError,
    InternalError,
    InvalidStatusCodeError,
    NotFoundError,
    RateLimitedError,
    SerializationError,
    UnauthorizedError,
)
from atlassian_api.jira import JiraClient

__version__ = '0.1.0'
