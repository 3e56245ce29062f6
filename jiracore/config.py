from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import yaml

if TYPE_CHECKING:
    from .auth import CredentialProvider


DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "jira_auth.yaml"


class AuthMode(str, Enum):
    COOKIE = "cookie"
    BASIC = "basic"
    TOKEN = "token"


@dataclass
class JiraConfig:
    base_url: str
    auth_mode: AuthMode = AuthMode.COOKIE
    username: str | None = None
    token: str | None = None
    verify_ssl: bool = True
    timeout_seconds: int = 30
    credential_provider: CredentialProvider | None = None
    post_login_hooks: list[Callable[..., None]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        self.auth_mode = AuthMode(self.auth_mode)


def _optional_str(value: Any) -> str | None:
    text = str(value).strip() if value is not None else ""
    return text or None


def _parse_auth_mode(raw: Any) -> AuthMode:
    value = (str(raw).strip().lower() if raw is not None else "") or AuthMode.COOKIE.value
    try:
        return AuthMode(value)
    except ValueError as error:
        allowed = ", ".join(mode.value for mode in AuthMode)
        raise ValueError(f"Unsupported auth_mode {value!r}, expected one of: {allowed}") from error


def load_config(config_path: str | None = None) -> dict[str, Any]:
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as file:
        content = yaml.safe_load(file) or {}

    if not content.get("base_url"):
        raise ValueError("Missing required config keys: base_url")

    return {
        "base_url": str(content["base_url"]).rstrip("/"),
        "auth_mode": _parse_auth_mode(content.get("auth_mode")),
        "username": _optional_str(content.get("username")),
        "token": _optional_str(content.get("token")),
        "verify_ssl": bool(content.get("verify_ssl", True)),
        "request_timeout_seconds": int(content.get("request_timeout_seconds", 30)),
    }


def build_jira_config(
    cfg: dict[str, Any],
    credential_provider: CredentialProvider | None = None,
    post_login_hooks: list[Callable[..., None]] | None = None,
) -> JiraConfig:
    return JiraConfig(
        base_url=cfg["base_url"],
        auth_mode=cfg.get("auth_mode", AuthMode.COOKIE),
        username=cfg.get("username"),
        token=cfg.get("token"),
        verify_ssl=cfg.get("verify_ssl", True),
        timeout_seconds=cfg.get("request_timeout_seconds", 30),
        credential_provider=credential_provider,
        post_login_hooks=list(post_login_hooks or []),
    )
