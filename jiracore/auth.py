from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

import requests

from .config import AuthMode, JiraConfig
from .errors import ClientError, CredentialsUnavailable
from .transport import read_response, send

logger = logging.getLogger(__name__)

SESSION_PATH = "/rest/auth/1/session"


class CredentialProvider(Protocol):
    def get_username(self) -> str: ...

    def get_secret(self, username: str, mode: AuthMode) -> str: ...


@dataclass(frozen=True)
class Credentials:
    username: str
    secret: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, secret='***')"


@dataclass(frozen=True)
class Session:
    mode: AuthMode
    token: str

    def __repr__(self) -> str:
        return f"Session(mode={self.mode.value!r}, token='***')"

    def auth_headers(self) -> dict[str, str]:
        if self.mode is AuthMode.COOKIE:
            return {"cookie": self.token}
        return {"Authorization": f"Basic {self.token}"}


def encode_basic_token(credentials: Credentials) -> str:
    raw = f"{credentials.username}:{credentials.secret}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def _cookie_from_body(body: Any) -> str:
    payload = body if isinstance(body, dict) else {}
    cookie = payload.get("session") if isinstance(payload.get("session"), dict) else payload
    name = cookie.get("name")
    value = cookie.get("value")
    if not name or value is None:
        raise ClientError("Jira session response did not contain a cookie name and value", body=body)
    return f"{name}={value}"


class AuthManager:
    """Turns credentials into the single live Session of a client."""

    def __init__(self, config: JiraConfig, http: requests.Session) -> None:
        self.config = config
        self.http = http
        self.session: Session | None = None
        self.hooks: list[Callable[[Session], None]] = list(config.post_login_hooks)
        self._credentials: Credentials | None = None

    def add_hook(self, hook: Callable[[Session], None]) -> None:
        self.hooks.append(hook)

    def _provider(self) -> CredentialProvider:
        provider = self.config.credential_provider
        if provider is None:
            raise CredentialsUnavailable("No credentials configured and no credential provider available")
        return provider

    def _resolve_username(self, username: str | None) -> str:
        resolved = username or self.config.username
        if not resolved:
            resolved = self._provider().get_username()
        if not resolved:
            raise CredentialsUnavailable("No Jira username available")
        return resolved

    def _resolve_secret(self, username: str, secret: str | None) -> str:
        resolved = secret
        if not resolved and self.config.auth_mode is AuthMode.TOKEN:
            resolved = self.config.token
        if not resolved:
            resolved = self._provider().get_secret(username, self.config.auth_mode)
        if not resolved:
            raise CredentialsUnavailable(f"No Jira secret available for {username}")
        return resolved

    def _create_cookie_session(self, credentials: Credentials) -> str:
        response = send(
            self.http,
            self.config,
            "POST",
            SESSION_PATH,
            body={"username": credentials.username, "password": credentials.secret},
        )
        return _cookie_from_body(read_response(response))

    def login(self, username: str | None = None, secret: str | None = None) -> Session:
        mode = self.config.auth_mode
        resolved_username = self._resolve_username(username)
        credentials = Credentials(resolved_username, self._resolve_secret(resolved_username, secret))

        logger.info("Logging in to %s as %s (%s auth)", self.config.base_url, credentials.username, mode.value)
        if mode is AuthMode.COOKIE:
            token = self._create_cookie_session(credentials)
        else:
            token = encode_basic_token(credentials)

        session = Session(mode=mode, token=token)
        self.session = session
        self._credentials = credentials

        for hook in self.hooks:
            hook(session)
        return session

    def relogin(self) -> Session:
        if self._credentials is None:
            return self.login()
        return self.login(self._credentials.username, self._credentials.secret)

    def clear(self) -> None:
        self.session = None
        self._credentials = None
