"""HTTP call pipeline shared by the admin, bitbucket and jira clients.

A call goes through three steps:

    new_request()       resolve the path, encode the body, attach credentials
    call()              dispatch, retrying 429 responses with exponential backoff
    process_response()  capture the body and map the status to a result or error
"""

import functools
import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import urljoin, urlsplit

import pydantic
import requests
from requests.auth import HTTPBasicAuth

from atlassian_api.auth import Authentication
from atlassian_api.config import ClientConfig, get_credentials, load_env
from atlassian_api.context import Context
from atlassian_api.errors import (
    ConfigError,
    RequestConstructionError,
    SerializationError,
    URLParseError,
    error_for_status,
)

logger = logging.getLogger(__name__)


class Connector(Protocol):
    """The two operations a resource service needs from a product client."""

    def new_request(self, ctx, method, url_str, content_type='', body=None): ...

    def call(self, request, schema=None): ...


@dataclass
class APIRequest:
    """A prepared request bound to the context that may cancel it."""

    context: Context
    prepared: requests.PreparedRequest

    @property
    def method(self):
        return self.prepared.method

    @property
    def url(self):
        return self.prepared.url

    @property
    def headers(self):
        return self.prepared.headers

    @property
    def body(self):
        return self.prepared.body


@dataclass
class APIResponse:
    """Envelope around a terminal response, returned on success and attached to errors."""

    raw: requests.Response
    code: int
    method: str
    endpoint: str
    body: bytes = b''
    data: Any = None

    @property
    def text(self):
        return self.body.decode('utf-8', errors='replace')


@functools.lru_cache(maxsize=None)
def _adapter(schema):
    return pydantic.TypeAdapter(schema)


def _json_default(value):
    if isinstance(value, pydantic.BaseModel):
        return value.model_dump(mode='json', by_alias=True, exclude_none=True)
    raise TypeError(f'Object of type {type(value).__name__} is not JSON serializable')


def _parse_url(url_str):
    if not isinstance(url_str, str):
        raise URLParseError(f'invalid url: {url_str!r}')
    if url_str != url_str.strip():
        raise URLParseError(f'leading or trailing whitespace in url: {url_str!r}')
    if any(ord(c) < 0x20 or c == '\x7f' for c in url_str):
        raise URLParseError(f'invalid control character in url: {url_str!r}')
    try:
        parts = urlsplit(url_str)
        parts.port
    except ValueError as e:
        raise URLParseError(f'invalid url {url_str!r}: {e}') from e
    return parts


def encode_body(body):
    """Materialize a request body as bytes, or None when there is no body.

    Raw buffers and binary file objects are sent verbatim, anything else is
    JSON encoded.
    """
    if body is None:
        return None
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    if hasattr(body, 'read'):
        data = body.read()
        return data.encode('utf-8') if isinstance(data, str) else bytes(data)
    try:
        return json.dumps(body, default=_json_default, separators=(',', ':')).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise SerializationError(f'cannot encode request body: {e}') from e


class BaseClient:
    """Product-agnostic client: request builder, retry loop and classifier.

    ``http`` is the transport; anything with ``send(prepared, **kwargs)``
    works, a fresh requests.Session is used by default. Concurrent calls share
    only the immutable config and the (locked) Authentication.
    """

    product = None
    default_site = None

    def __init__(self, site=None, http=None, config=None, auth=None):
        site = site or self.default_site
        if not site:
            raise ConfigError(f'{type(self).__name__} requires a site URL')
        if not site.endswith('/'):
            site += '/'
        _parse_url(site)

        self.site = site
        self.http = http if http is not None else requests.Session()
        self.config = config if config is not None else ClientConfig()
        self.auth = auth if auth is not None else Authentication()

    @classmethod
    def from_env(cls, http=None, env=None):
        """Build a client from ATLASSIAN_* / BITBUCKET_* variables (see config)."""
        env = load_env() if env is None else env
        site, email, token = get_credentials(cls.product, env)
        client = cls(site=site, http=http, config=ClientConfig.from_env(env))
        if email:
            client.auth.set_basic_auth(email, token)
        else:
            client.auth.set_bearer_token(token)
        return client

    def close(self):
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # -----------------------------------------------------------------------
    # Request builder
    # -----------------------------------------------------------------------

    def new_request(self, ctx, method, url_str, content_type='', body=None):
        """Build an APIRequest for ``url_str`` resolved against the site.

        A ``content_type`` override marks the request as a file upload, which
        also needs the ``X-Atlassian-Token: no-check`` header.
        """
        if ctx is None:
            raise RequestConstructionError('a Context is required')

        _parse_url(url_str)
        url = urljoin(self.site, url_str)
        data = encode_body(body)

        headers = {'Accept': 'application/json'}
        if data is not None:
            headers['Content-Type'] = 'application/json'
        if content_type:
            headers['Content-Type'] = content_type
            headers['X-Atlassian-Token'] = 'no-check'

        creds = self.auth.snapshot()
        auth = None
        if creds.has_basic_auth:
            auth = HTTPBasicAuth(creds.mail, creds.token or '')
        if creds.has_user_agent:
            headers['User-Agent'] = creds.user_agent
        if creds.bearer_token and not creds.has_basic_auth:
            headers['Authorization'] = f'Bearer {creds.bearer_token}'

        try:
            prepared = requests.Request(method, url, headers=headers, data=data, auth=auth).prepare()
        except (requests.RequestException, ValueError, TypeError) as e:
            raise RequestConstructionError(f'cannot build {method} {url}: {e}') from e

        return APIRequest(context=ctx, prepared=prepared)

    # -----------------------------------------------------------------------
    # Call pipeline
    # -----------------------------------------------------------------------

    def backoff_delay(self, attempt):
        """Wait after rate-limited attempt ``attempt + 1``: initial * 2**attempt, capped."""
        delay = self.config.initial_retry_delay
        ceiling = self.config.max_retry_delay
        for _ in range(attempt):
            if delay >= ceiling:
                break
            delay *= 2
        return min(delay, ceiling)

    def _send_settings(self, request):
        """Proxy / CA bundle settings from the environment, as Session.request merges them."""
        merge = getattr(self.http, 'merge_environment_settings', None)
        if merge is None:
            return {}
        return merge(request.url, {}, None, None, None)

    def call(self, request, schema=None):
        """Dispatch ``request`` and classify the terminal response.

        Only 429 responses are retried. Every 429 is followed by a backoff
        wait, the last one included. Transport errors propagate untouched,
        cancellation raises the context's error, and once the retries are used
        up the last 429 is classified as a RateLimitedError.
        """
        ctx = request.context
        max_retries = self.config.max_retries
        settings = self._send_settings(request)
        attempt = 0

        while True:
            err = ctx.err()
            if err is not None:
                raise err

            kwargs = dict(settings)
            remaining = ctx.remaining()
            if remaining is not None:
                kwargs['timeout'] = remaining
            response = self.http.send(request.prepared.copy(), **kwargs)

            if response.status_code != 429:
                return self.process_response(response, schema)

            last = attempt == max_retries
            delay = self.backoff_delay(attempt)
            reason = response.headers.get('RateLimit-Reason', 'unknown')
            if last:
                logger.info('Rate limited (%s), waiting %.1fs before giving up on %s',
                            reason, delay, request.url)
            else:
                logger.info('Rate limited (%s), retrying %s in %.1fs (attempt %d/%d)',
                            reason, request.url, delay, attempt + 1, max_retries)
                response.close()

            err = ctx.wait(delay)
            if err is not None:
                response.close()
                raise err

            attempt += 1
            if attempt > max_retries:
                if max_retries:
                    logger.warning('Rate limit retries exhausted after %d attempts: %s %s',
                                   attempt, request.method, request.url)
                return self.process_response(response, schema)

    # -----------------------------------------------------------------------
    # Response classifier
    # -----------------------------------------------------------------------

    def process_response(self, response, schema=None):
        """Capture the body, then return the envelope or raise the mapped APIError.

        On 2xx the body is validated against ``schema`` (any type pydantic
        can validate) into ``APIResponse.data``. An empty body decodes to None.
        """
        with response:
            body = response.content or b''

        request = response.request
        envelope = APIResponse(
            raw=response,
            code=response.status_code,
            method=request.method if request is not None else '',
            endpoint=request.url if request is not None else '',
            body=body,
        )

        if not 200 <= response.status_code < 300:
            error = error_for_status(response.status_code)
            raise error(response.status_code, envelope.text, response=envelope)

        if schema is not None and body:
            try:
                envelope.data = _adapter(schema).validate_json(body)
            except pydantic.ValidationError as e:
                raise SerializationError(
                    f'cannot decode {envelope.method} {envelope.endpoint} response: {e}',
                    response=envelope,
                ) from e

        return envelope
