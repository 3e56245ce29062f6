from __future__ import annotations

import logging
from typing import Any

import requests

from .config import JiraConfig
from .errors import Unreachable, classify_response

logger = logging.getLogger(__name__)

DENIED_REASON_HEADER = "X-Authentication-Denied-Reason"


def send(
    http: requests.Session,
    config: JiraConfig,
    method: str,
    path: str,
    body: Any = None,
    headers: dict[str, str] | None = None,
    **kwargs: Any,
) -> requests.Response:
    url = f"{config.base_url}{path}"
    logger.debug("%s %s", method, url)
    try:
        return http.request(
            method=method,
            url=url,
            json=body,
            headers=headers or {},
            timeout=config.timeout_seconds,
            verify=config.verify_ssl,
            **kwargs,
        )
    except requests.RequestException as error:
        raise Unreachable(f"Failed to call Jira API: {error}") from error


def parse_body(response: requests.Response) -> Any:
    if response.status_code == 204 or not response.text:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def read_response(response: requests.Response, retried: bool = False) -> Any:
    body = parse_body(response)
    classify_response(
        response.status_code,
        body,
        retried=retried,
        denied_reason=response.headers.get(DENIED_REASON_HEADER),
    )
    return body
