"""Credential holder consulted by the request builder."""

import threading
from typing import NamedTuple, Optional


class Credentials(NamedTuple):
    """Immutable view of an Authentication at one point in time."""
    mail: Optional[str] = None
    token: Optional[str] = None
    bearer_token: Optional[str] = None
    user_agent: Optional[str] = None

    @property
    def has_basic_auth(self):
        return self.mail is not None

    @property
    def has_user_agent(self):
        return self.user_agent is not None


class Authentication:
    """Basic auth pair, bearer token and user agent for one client.

    Setters may be called from any thread. Requests read a single snapshot,
    so a request never mixes credentials from before and after an update.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._creds = Credentials()

    def _replace(self, **changes):
        with self._lock:
            self._creds = self._creds._replace(**changes)

    def snapshot(self):
        with self._lock:
            return self._creds

    def set_basic_auth(self, mail, token):
        self._replace(mail=mail, token=token)

    def get_basic_auth(self):
        creds = self.snapshot()
        return creds.mail, creds.token

    def has_basic_auth(self):
        return self.snapshot().has_basic_auth

    def set_bearer_token(self, token):
        self._replace(bearer_token=token)

    def get_bearer_token(self):
        return self.snapshot().bearer_token or ''

    def set_user_agent(self, agent):
        self._replace(user_agent=agent)

    def get_user_agent(self):
        return self.snapshot().user_agent or ''

    def has_user_agent(self):
        return self.snapshot().has_user_agent
