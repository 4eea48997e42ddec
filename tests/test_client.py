"""Tests for atlassian_api.client: request builder, retry loop, classifier."""

import base64
import io
import json
import logging
import threading
from typing import Optional

import pytest
import requests
import responses
from pydantic import Field

from atlassian_api.client import APIResponse, BaseClient, encode_body
from atlassian_api.config import ClientConfig
from atlassian_api.context import Context
from atlassian_api.errors import (
    BadRequestError,
    CancelledError,
    ConfigError,
    DeadlineExceededError,
    InternalError,
    InvalidStatusCodeError,
    NotFoundError,
    RateLimitedError,
    RequestConstructionError,
    SerializationError,
    UnauthorizedError,
    URLParseError,
)
from atlassian_api.models.common import Scheme

BASE = "https://test.atlassian.net"


class BoardScheme(Scheme):
    id: Optional[int] = None
    name: Optional[str] = None
    board_type: Optional[str] = Field(None, alias="type")


def _basic(mail, token):
    return "Basic " + base64.b64encode(f"{mail}:{token}".encode()).decode()


@pytest.fixture
def waits(monkeypatch):
    """Record backoff waits instead of sleeping."""
    recorded = []

    def fake_wait(self, delay):
        recorded.append(delay)
        return None

    monkeypatch.setattr(Context, "wait", fake_wait)
    return recorded


class TestBaseClient:
    def test_site_gets_trailing_slash(self):
        c = BaseClient(site="https://x.atlassian.net")
        assert c.site == "https://x.atlassian.net/"

    def test_site_required(self):
        with pytest.raises(ConfigError):
            BaseClient()

    def test_default_config(self):
        c = BaseClient(site=BASE)
        assert c.config == ClientConfig(max_retries=5, initial_retry_delay=60.0, max_retry_delay=600.0)
        assert isinstance(c.http, requests.Session)

    def test_context_manager_closes_transport(self):
        class Transport:
            closed = False

            def close(self):
                self.closed = True

        transport = Transport()
        with BaseClient(site=BASE, http=transport):
            pass
        assert transport.closed


class TestNewRequest:
    def test_relative_path_without_body(self, ctx):
        c = BaseClient(site="https://x/")
        req = c.new_request(ctx, "GET", "a/b")
        assert req.url == "https://x/a/b"
        assert req.method == "GET"
        assert req.headers["Accept"] == "application/json"
        assert "Content-Type" not in req.headers
        assert req.body is None
        assert req.context is ctx

    def test_json_body(self, ctx):
        c = BaseClient(site="https://x/")
        req = c.new_request(ctx, "POST", "items", body={"a": 1})
        assert req.url == "https://x/items"
        assert req.headers["Content-Type"] == "application/json"
        assert req.body == b'{"a":1}'
        assert "X-Atlassian-Token" not in req.headers

    def test_model_body_uses_aliases(self, ctx):
        c = BaseClient(site="https://x/")
        req = c.new_request(ctx, "POST", "boards", body=BoardScheme(id=4, board_type="scrum"))
        assert json.loads(req.body) == {"id": 4, "type": "scrum"}

    def test_absolute_url_overrides_site(self, ctx):
        c = BaseClient(site=BASE)
        req = c.new_request(ctx, "GET", "https://api.atlassian.com/jsm/assets/v1/object/1")
        assert req.url == "https://api.atlassian.com/jsm/assets/v1/object/1"

    def test_query_string_is_kept(self, ctx):
        c = BaseClient(site=BASE)
        req = c.new_request(ctx, "GET", "2.0/workspaces/ws?page=1&pagelen=20")
        assert req.url == f"{BASE}/2.0/workspaces/ws?page=1&pagelen=20"

    def test_inner_space_in_query_is_quoted(self, ctx):
        c = BaseClient(site=BASE)
        req = c.new_request(ctx, "GET", "rest/api/2/search?jql=a b")
        assert req.url == f"{BASE}/rest/api/2/search?jql=a%20b"

    @pytest.mark.parametrize("url", ["rest/api/2/issue\n", "rest/api/2/\x00issue"])
    def test_control_characters_rejected(self, ctx, url):
        with pytest.raises(URLParseError):
            BaseClient(site=BASE).new_request(ctx, "GET", url)

    def test_raw_bytes_sent_verbatim(self, ctx):
        c = BaseClient(site=BASE)
        req = c.new_request(ctx, "POST", "upload", body=b"--boundary\r\nraw")
        assert req.body == b"--boundary\r\nraw"
        assert req.headers["Content-Type"] == "application/json"

    def test_file_like_body_read_once(self, ctx):
        c = BaseClient(site=BASE)
        req = c.new_request(ctx, "POST", "upload", body=io.BytesIO(b"Hello World"))
        assert req.body == b"Hello World"

    def test_content_type_override(self, ctx):
        c = BaseClient(site=BASE)
        req = c.new_request(ctx, "POST", "rest/api/2/issue/KP-1/attachments",
                            content_type="multipart/form-data; boundary=xyz", body=b"data")
        assert req.headers["Content-Type"] == "multipart/form-data; boundary=xyz"
        assert req.headers["X-Atlassian-Token"] == "no-check"

    def test_basic_auth_and_user_agent(self, ctx):
        c = BaseClient(site=BASE)
        c.auth.set_basic_auth("mail", "token")
        c.auth.set_user_agent("firefox")
        req = c.new_request(ctx, "GET", "rest/2/issue/attachment")
        assert req.headers["Authorization"] == _basic("mail", "token")
        assert req.headers["User-Agent"] == "firefox"

    def test_bearer_token(self, ctx):
        c = BaseClient(site=BASE)
        c.auth.set_bearer_token("abc")
        req = c.new_request(ctx, "GET", "admin/v1/orgs")
        assert req.headers["Authorization"] == "Bearer abc"

    def test_basic_auth_wins_over_bearer(self, ctx):
        c = BaseClient(site=BASE)
        c.auth.set_bearer_token("abc")
        c.auth.set_basic_auth("mail", "token")
        req = c.new_request(ctx, "GET", "x")
        assert req.headers["Authorization"] == _basic("mail", "token")

    def test_no_credentials(self, ctx):
        req = BaseClient(site=BASE).new_request(ctx, "GET", "x")
        assert "Authorization" not in req.headers
        assert "User-Agent" not in req.headers

    @pytest.mark.parametrize("url", [
        " https://zhidao.baidu.com/special/view?id=49105a24626975510000&preview=1",
        "http://[::1/broken",
        "https://host:notaport/x",
    ])
    def test_unparseable_url(self, ctx, url):
        with pytest.raises(URLParseError):
            BaseClient(site=BASE).new_request(ctx, "GET", url)

    def test_unserializable_body(self, ctx):
        with pytest.raises(SerializationError):
            BaseClient(site=BASE).new_request(ctx, "POST", "x", body={"when": object()})

    def test_missing_context(self):
        with pytest.raises(RequestConstructionError):
            BaseClient(site=BASE).new_request(None, "GET", "rest/2/issue/attachment")


class TestEncodeBody:
    def test_none(self):
        assert encode_body(None) is None

    def test_bytearray(self):
        assert encode_body(bytearray(b"ab")) == b"ab"

    def test_list_of_models(self):
        assert json.loads(encode_body([BoardScheme(id=1), BoardScheme(id=2)])) == [{"id": 1}, {"id": 2}]


class TestProcessResponse:
    @responses.activate
    def test_success_decodes_into_schema(self, client, ctx):
        responses.add(responses.GET, f"{BASE}/board/4", body='{"id": 4, "name": "KP - Scrum", "type": "scrum"}')
        result = client.call(client.new_request(ctx, "GET", "board/4"), BoardScheme)
        assert isinstance(result, APIResponse)
        assert result.code == 200
        assert result.method == "GET"
        assert result.endpoint == f"{BASE}/board/4"
        assert result.data.id == 4
        assert result.data.name == "KP - Scrum"
        assert result.data.board_type == "scrum"

    @responses.activate
    def test_decoded_equals_direct_decode(self, client, ctx):
        body = '{"id": 4, "extra": {"nested": [1, 2]}}'
        responses.add(responses.GET, f"{BASE}/board/4", body=body)
        result = client.call(client.new_request(ctx, "GET", "board/4"), BoardScheme)
        assert result.data == BoardScheme.model_validate_json(body)
        assert result.data.id == 4

    @responses.activate
    def test_success_without_schema(self, client, ctx):
        responses.add(responses.GET, f"{BASE}/hello", body="Hello, world!")
        result = client.call(client.new_request(ctx, "GET", "hello"))
        assert result.body == b"Hello, world!"
        assert result.text == "Hello, world!"
        assert result.data is None

    @responses.activate
    def test_generic_schema(self, client, ctx):
        responses.add(responses.GET, f"{BASE}/list", json=[{"id": 1}, {"id": 2}])
        result = client.call(client.new_request(ctx, "GET", "list"), list)
        assert result.data == [{"id": 1}, {"id": 2}]

    @responses.activate
    def test_no_content(self, client, ctx):
        responses.add(responses.PUT, f"{BASE}/issue/KP-1", status=204)
        result = client.call(client.new_request(ctx, "PUT", "issue/KP-1", body={"a": 1}), BoardScheme)
        assert result.code == 204
        assert result.data is None

    @responses.activate
    def test_decode_failure_keeps_envelope(self, client, ctx):
        responses.add(responses.GET, f"{BASE}/board/4", body="not json")
        with pytest.raises(SerializationError) as exc_info:
            client.call(client.new_request(ctx, "GET", "board/4"), BoardScheme)
        assert exc_info.value.response.code == 200
        assert exc_info.value.response.body == b"not json"

    @pytest.mark.parametrize("status,error", [
        (400, BadRequestError),
        (401, UnauthorizedError),
        (404, NotFoundError),
        (500, InternalError),
        (403, InvalidStatusCodeError),
        (409, InvalidStatusCodeError),
        (503, InvalidStatusCodeError),
        (302, InvalidStatusCodeError),
    ])
    @responses.activate
    def test_status_taxonomy(self, client, ctx, status, error):
        responses.add(responses.POST, f"{BASE}/thing", status=status, body="Hello, world!")
        with pytest.raises(error) as exc_info:
            client.call(client.new_request(ctx, "POST", "thing", body={}), BoardScheme)
        envelope = exc_info.value.response
        assert type(exc_info.value) is error
        assert envelope.code == status
        assert envelope.method == "POST"
        assert envelope.body == b"Hello, world!"
        assert exc_info.value.status == status

    @responses.activate
    def test_not_found_scenario(self, client, ctx):
        responses.add(responses.GET, f"{BASE}/items/9", status=404, body="not found")
        with pytest.raises(NotFoundError) as exc_info:
            client.call(client.new_request(ctx, "GET", "items/9"))
        assert exc_info.value.response.code == 404
        assert exc_info.value.response.body == b"not found"
        assert str(exc_info.value) == "HTTP 404: not found"

    @responses.activate
    def test_process_response_directly(self, client):
        responses.add(responses.GET, f"{BASE}/board/4", json={"id": 4})
        raw = requests.get(f"{BASE}/board/4", stream=True)
        result = client.process_response(raw, BoardScheme)
        assert result.data.id == 4
        assert result.endpoint == f"{BASE}/board/4"


class TestCall:
    @responses.activate
    def test_rate_limit_then_success(self, client, ctx, waits):
        responses.add(responses.GET, f"{BASE}/x", status=429, body="Rate limit exceeded")
        responses.add(responses.GET, f"{BASE}/x", body="Hello, world!")
        result = client.call(client.new_request(ctx, "GET", "x"))
        assert result.code == 200
        assert result.body == b"Hello, world!"
        assert len(responses.calls) == 2
        assert waits == [0]

    @pytest.mark.parametrize("max_retries", [0, 1, 3])
    @responses.activate
    def test_retries_exhausted(self, base_url, ctx, waits, max_retries):
        client = BaseClient(site=base_url, config=ClientConfig(max_retries, 0, 0))
        responses.add(responses.GET, f"{BASE}/x", status=429, body="Rate limit exceeded")
        with pytest.raises(RateLimitedError) as exc_info:
            client.call(client.new_request(ctx, "GET", "x"))
        assert len(responses.calls) == max_retries + 1
        assert len(waits) == max_retries + 1
        assert exc_info.value.response.code == 429
        assert exc_info.value.response.body == b"Rate limit exceeded"

    @responses.activate
    def test_zero_retries_still_waits_once(self, base_url, ctx, waits):
        client = BaseClient(site=base_url, config=ClientConfig(0, 1, 10))
        responses.add(responses.GET, f"{BASE}/x", status=429)
        with pytest.raises(RateLimitedError):
            client.call(client.new_request(ctx, "GET", "x"))
        assert waits == [1]
        assert len(responses.calls) == 1

    @responses.activate
    def test_backoff_doubles_until_ceiling(self, base_url, ctx, waits):
        # no jitter: the waits are exactly initial * 2**k, clamped
        client = BaseClient(site=base_url, config=ClientConfig(max_retries=5, initial_retry_delay=1,
                                                               max_retry_delay=10))
        responses.add(responses.GET, f"{BASE}/x", status=429)
        with pytest.raises(RateLimitedError):
            client.call(client.new_request(ctx, "GET", "x"))
        assert waits == [1, 2, 4, 8, 10, 10]
        assert waits == [client.backoff_delay(k) for k in range(6)]

    def test_backoff_delay(self):
        client = BaseClient(site=BASE, config=ClientConfig(max_retries=5, initial_retry_delay=60,
                                                           max_retry_delay=600))
        assert [client.backoff_delay(k) for k in range(6)] == [60, 120, 240, 480, 600, 600]

    @pytest.mark.parametrize("config, expected", [
        (ClientConfig(), 600.0),
        (ClientConfig(max_retries=2000, initial_retry_delay=0.0, max_retry_delay=0.0), 0.0),
        (ClientConfig(max_retries=2000, initial_retry_delay=0.5, max_retry_delay=3.0), 3.0),
    ])
    def test_backoff_delay_large_attempt_stays_at_ceiling(self, config, expected):
        client = BaseClient(site=BASE, config=config)
        assert client.backoff_delay(1100) == expected

    @responses.activate
    def test_cancelled_during_final_wait(self, base_url):
        client = BaseClient(site=base_url, config=ClientConfig(max_retries=0, initial_retry_delay=30,
                                                               max_retry_delay=60))
        responses.add(responses.GET, f"{BASE}/x", status=429)
        ctx = Context()
        timer = threading.Timer(0.05, ctx.cancel)
        timer.start()
        try:
            with pytest.raises(CancelledError):
                client.call(client.new_request(ctx, "GET", "x"))
        finally:
            timer.cancel()
        assert len(responses.calls) == 1

    def test_environment_ca_bundle_is_used(self, client, ctx, monkeypatch):
        monkeypatch.setenv("REQUESTS_CA_BUNDLE", "/etc/ssl/custom-ca.pem")
        sent = []

        def record(adapter, request, **kwargs):
            sent.append(kwargs)
            response = requests.Response()
            response.status_code = 204
            response._content = b""
            response._content_consumed = True
            response.request = request
            return response

        monkeypatch.setattr(requests.adapters.HTTPAdapter, "send", record)
        client.call(client.new_request(ctx, "GET", "x"))
        assert sent[0]["verify"] == "/etc/ssl/custom-ca.pem"

    @responses.activate
    def test_only_429_is_retried(self, client, ctx, waits):
        responses.add(responses.GET, f"{BASE}/x", status=500, body="boom")
        with pytest.raises(InternalError):
            client.call(client.new_request(ctx, "GET", "x"))
        assert len(responses.calls) == 1
        assert waits == []

    @responses.activate
    def test_body_resent_on_retry(self, client, ctx, waits):
        responses.add(responses.POST, f"{BASE}/items", status=429)
        responses.add(responses.POST, f"{BASE}/items", status=201, json={"id": 7})
        result = client.call(client.new_request(ctx, "POST", "items", body={"a": 1}), BoardScheme)
        assert result.data.id == 7
        assert [call.request.body for call in responses.calls] == [b'{"a":1}', b'{"a":1}']

    @responses.activate
    def test_transport_error_not_retried(self, client, ctx, waits):
        responses.add(responses.GET, f"{BASE}/x", body=requests.ConnectionError("connection refused"))
        with pytest.raises(requests.ConnectionError):
            client.call(client.new_request(ctx, "GET", "x"))
        assert len(responses.calls) == 1
        assert waits == []

    @responses.activate
    def test_cancelled_before_dispatch(self, client):
        responses.add(responses.GET, f"{BASE}/x", body="ok")
        ctx = Context()
        request = client.new_request(ctx, "GET", "x")
        ctx.cancel()
        with pytest.raises(CancelledError):
            client.call(request)
        assert len(responses.calls) == 0

    @responses.activate
    def test_expired_deadline_before_dispatch(self, client):
        responses.add(responses.GET, f"{BASE}/x", body="ok")
        request = client.new_request(Context.with_timeout(0), "GET", "x")
        with pytest.raises(DeadlineExceededError):
            client.call(request)
        assert len(responses.calls) == 0

    @responses.activate
    def test_cancelled_during_backoff(self, base_url):
        client = BaseClient(site=base_url, config=ClientConfig(max_retries=3, initial_retry_delay=30,
                                                               max_retry_delay=60))
        responses.add(responses.GET, f"{BASE}/x", status=429)
        ctx = Context()
        timer = threading.Timer(0.05, ctx.cancel)
        timer.start()
        try:
            with pytest.raises(CancelledError) as exc_info:
                client.call(client.new_request(ctx, "GET", "x"))
        finally:
            timer.cancel()
        assert not isinstance(exc_info.value, DeadlineExceededError)
        assert len(responses.calls) == 1

    @responses.activate
    def test_deadline_during_backoff(self, base_url):
        client = BaseClient(site=base_url, config=ClientConfig(max_retries=3, initial_retry_delay=30,
                                                               max_retry_delay=60))
        responses.add(responses.GET, f"{BASE}/x", status=429)
        with pytest.raises(DeadlineExceededError):
            client.call(client.new_request(Context.with_timeout(0.05), "GET", "x"))
        assert len(responses.calls) == 1

    @responses.activate
    def test_logs_rate_limit_wait(self, client, ctx, waits, caplog):
        responses.add(responses.GET, f"{BASE}/x", status=429, headers={"RateLimit-Reason": "jira-burst-based"})
        responses.add(responses.GET, f"{BASE}/x", body="ok")
        with caplog.at_level(logging.INFO, logger="atlassian_api.client"):
            client.call(client.new_request(ctx, "GET", "x"))
        assert "Rate limited (jira-burst-based)" in caplog.text
        assert "attempt 1/3" in caplog.text
