"""Exception hierarchy shared by the admin, bitbucket and jira clients."""


class AtlassianError(Exception):
    """Base class for everything raised by atlassian_api."""


# ---------------------------------------------------------------------------
# HTTP status taxonomy
# ---------------------------------------------------------------------------

class APIError(AtlassianError):
    """A terminal non-2xx response.

    ``response`` is the APIResponse envelope, so the status, endpoint and raw
    body stay available to the caller.
    """

    def __init__(self, status, body, response=None):
        super().__init__(status, body)
        self.status = status
        self.body = body
        self.response = response

    def __str__(self):
        return f'HTTP {self.status}: {self.body[:200]}'


class BadRequestError(APIError):
    pass


class UnauthorizedError(APIError):
    pass


class NotFoundError(APIError):
    pass


class RateLimitedError(APIError):
    pass


class InternalError(APIError):
    pass


class InvalidStatusCodeError(APIError):
    pass


STATUS_ERRORS = {
    400: BadRequestError,
    401: UnauthorizedError,
    404: NotFoundError,
    429: RateLimitedError,
    500: InternalError,
}


def error_for_status(status):
    return STATUS_ERRORS.get(status, InvalidStatusCodeError)


# ---------------------------------------------------------------------------
# Request building / decoding
# ---------------------------------------------------------------------------

class RequestError(AtlassianError):
    pass


class URLParseError(RequestError):
    pass


class RequestConstructionError(RequestError):
    pass


class SerializationError(AtlassianError):
    """A body could not be encoded, or a 2xx body could not be decoded."""

    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------

class CancelledError(AtlassianError):
    def __str__(self):
        return super().__str__() or 'context cancelled'


class DeadlineExceededError(CancelledError):
    def __str__(self):
        return Exception.__str__(self) or 'context deadline exceeded'


class ConfigError(AtlassianError):
    pass


# ---------------------------------------------------------------------------
# Missing mandatory parameters
# ---------------------------------------------------------------------------

class ValidationError(AtlassianError, ValueError):
    message = 'invalid parameter'

    def __init__(self, message=None):
        super().__init__(message or self.message)


class NoWorkspaceError(ValidationError):
    message = 'bitbucket: no workspace set'


class NoRepositoryError(ValidationError):
    message = 'bitbucket: no repository set'


class NoProjectKeyError(ValidationError):
    message = 'bitbucket: no project key set'


class NoMemberIDError(ValidationError):
    message = 'bitbucket: no member id set'


class NoPipelineUUIDError(ValidationError):
    message = 'bitbucket: no pipeline uuid set'


class NoAdminOrganizationError(ValidationError):
    message = 'admin: no organization id set'


class NoAccountIDError(ValidationError):
    message = 'admin: no account id set'


class NoTokenIDError(ValidationError):
    message = 'admin: no token id set'


class NoIssueKeyOrIDError(ValidationError):
    message = 'jira: no issue key/id set'


class NoCommentIDError(ValidationError):
    message = 'jira: no comment id set'
