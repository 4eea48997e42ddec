"""Client configuration: retry policy, .env loading and credential lookup."""

import os
from dataclasses import dataclass

from atlassian_api.errors import ConfigError

DEFAULT_BITBUCKET_SITE = 'https://api.bitbucket.org'
DEFAULT_ADMIN_SITE = 'https://api.atlassian.com'


def load_env(path=None):
    """Parse a .env file into a dict, skipping comments and blank lines."""
    if path is None:
        paths = [os.path.join(os.getcwd(), '.env'), os.path.join(os.path.dirname(__file__), '.env')]
    else:
        paths = [path]

    env = {}
    for env_path in paths:
        if os.path.isfile(env_path):
            with open(env_path) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith('#') and '=' in line:
                        k, v = line.split('=', 1)
                        env[k.strip()] = v.strip()
            break
    return env


def _lookup(env, *names):
    """First non-empty value among ``names``, .env before the process environment."""
    for name in names:
        value = env.get(name) or os.environ.get(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class ClientConfig:
    """Rate-limit retry policy. Delays are in seconds.

    ``max_retries`` counts additional attempts after the first, so a call is
    dispatched at most ``max_retries + 1`` times.
    """

    max_retries: int = 5
    initial_retry_delay: float = 60.0
    max_retry_delay: float = 600.0

    def __post_init__(self):
        if self.max_retries < 0:
            raise ConfigError(f'max_retries must be >= 0, got {self.max_retries}')
        if self.initial_retry_delay < 0 or self.max_retry_delay < 0:
            raise ConfigError('retry delays must be >= 0')
        if self.max_retry_delay < self.initial_retry_delay:
            raise ConfigError(
                f'max_retry_delay ({self.max_retry_delay}) must be >= '
                f'initial_retry_delay ({self.initial_retry_delay})')

    @classmethod
    def from_env(cls, env=None):
        """Build a config from ATLASSIAN_* retry variables, defaults otherwise."""
        env = load_env() if env is None else env
        kwargs = {}
        for field_name, var, cast in (
            ('max_retries', 'ATLASSIAN_MAX_RETRIES', int),
            ('initial_retry_delay', 'ATLASSIAN_INITIAL_RETRY_DELAY', float),
            ('max_retry_delay', 'ATLASSIAN_MAX_RETRY_DELAY', float),
        ):
            raw = _lookup(env, var)
            if raw is None:
                continue
            try:
                kwargs[field_name] = cast(raw)
            except ValueError as e:
                raise ConfigError(f'Invalid {var}: {raw!r}') from e
        return cls(**kwargs)


def get_credentials(product, env=None):
    """Return (site, email, token) for ``product`` from .env or environment variables.

    Admin uses a bearer token, so its email is always None.
    """
    env = load_env() if env is None else env

    if product == 'jira':
        site = _lookup(env, 'ATLASSIAN_URL')
        email = _lookup(env, 'ATLASSIAN_EMAIL')
        token = _lookup(env, 'ATLASSIAN_TOKEN')
        required = {'ATLASSIAN_URL': site, 'ATLASSIAN_EMAIL': email, 'ATLASSIAN_TOKEN': token}
    elif product == 'bitbucket':
        site = _lookup(env, 'BITBUCKET_URL') or DEFAULT_BITBUCKET_SITE
        email = _lookup(env, 'BITBUCKET_EMAIL', 'ATLASSIAN_EMAIL')
        token = _lookup(env, 'BITBUCKET_TOKEN', 'ATLASSIAN_TOKEN')
        required = {'BITBUCKET_EMAIL': email, 'BITBUCKET_TOKEN': token}
    elif product == 'admin':
        site = _lookup(env, 'ATLASSIAN_ADMIN_URL') or DEFAULT_ADMIN_SITE
        email = None
        token = _lookup(env, 'ATLASSIAN_ADMIN_TOKEN')
        required = {'ATLASSIAN_ADMIN_TOKEN': token}
    else:
        raise ConfigError(f'Unknown product: {product}')

    missing = [name for name, value in required.items() if not value]
    if missing:
        raise ConfigError(
            f'Missing {", ".join(missing)}. '
            f'Set them in .env or as environment variables.')

    return site.rstrip('/'), email, token
