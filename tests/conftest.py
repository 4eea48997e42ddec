"""Shared test fixtures."""

import pytest
import responses

from atlassian_api.admin import AdminClient
from atlassian_api.bitbucket import BitbucketClient
from atlassian_api.client import BaseClient
from atlassian_api.config import ClientConfig
from atlassian_api.context import Context
from atlassian_api.jira import JiraClient


@pytest.fixture
def base_url():
    return "https://test.atlassian.net"


@pytest.fixture
def fast_config():
    """Retry policy without any real waiting."""
    return ClientConfig(max_retries=3, initial_retry_delay=0, max_retry_delay=0)


@pytest.fixture
def ctx():
    return Context.background()


@pytest.fixture
def client(base_url, fast_config):
    c = BaseClient(site=base_url, config=fast_config)
    c.auth.set_basic_auth("test@example.com", "fake-token")
    return c


@pytest.fixture
def jira_client(base_url, fast_config):
    c = JiraClient(site=base_url, config=fast_config)
    c.auth.set_basic_auth("test@example.com", "fake-token")
    return c


@pytest.fixture
def bitbucket_client(fast_config):
    c = BitbucketClient(config=fast_config)
    c.auth.set_basic_auth("test@example.com", "fake-token")
    return c


@pytest.fixture
def admin_client(fast_config):
    c = AdminClient(config=fast_config)
    c.auth.set_bearer_token("admin-token")
    return c


@pytest.fixture
def mocked_responses():
    """Activate responses mock for the duration of a test."""
    with responses.RequestsMock() as rsps:
        yield rsps
