from __future__ import annotations

from typing import Any


class JiraClientError(Exception):
    def __init__(self, message: str, status: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class Unreachable(JiraClientError):
    pass


class InvalidCredentials(JiraClientError):
    pass


class CredentialsUnavailable(InvalidCredentials):
    pass


class LoginDenied(JiraClientError):
    pass


class AuthRetryFailed(JiraClientError):
    pass


class ClientError(JiraClientError):
    pass


class NotFound(ClientError):
    pass


class ServerError(JiraClientError):
    pass


class PaginationStalled(JiraClientError):
    pass


def classify_response(
    status: int | None,
    body: Any = None,
    retried: bool = False,
    denied_reason: str | None = None,
) -> None:
    """Raise the error matching a Jira response, or return for a success status."""
    if status is None:
        raise Unreachable("No response received from Jira API")
    if status == 401:
        if retried:
            raise AuthRetryFailed("Jira API rejected the request again after logging in", status, body)
        raise InvalidCredentials("Jira API rejected the supplied credentials", status, body)
    if status == 403:
        message = "Jira API denied the login, an interactive challenge (such as a CAPTCHA) is required"
        if denied_reason:
            message = f"{message}: {denied_reason}"
        raise LoginDenied(message, status, body)
    if status == 404:
        raise NotFound(f"Jira API resource not found: {body}", status, body)
    if 400 <= status < 500:
        raise ClientError(f"Jira API request failed: {status} {body}", status, body)
    if status >= 500:
        raise ServerError(f"Jira API server error: {status}", status, body)
