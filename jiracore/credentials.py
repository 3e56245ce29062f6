"""Interactive credential prompts for command line use."""

from __future__ import annotations

import getpass
from typing import Callable

from .config import AuthMode
from .errors import CredentialsUnavailable


class ConsoleCredentialProvider:
    """Asks for whatever the configuration does not already supply."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        secret_func: Callable[[str], str] = getpass.getpass,
    ) -> None:
        self._input = input_func
        self._secret = secret_func

    def get_username(self) -> str:
        username = self._input("Jira username: ").strip()
        if not username:
            raise CredentialsUnavailable("No username provided")
        return username

    def get_secret(self, username: str, mode: AuthMode) -> str:
        label = "API token" if mode is AuthMode.TOKEN else "password"
        secret = self._secret(f"Jira {label} for {username}: ")
        if not secret:
            raise CredentialsUnavailable(f"No {label} provided for {username}")
        return secret
