from __future__ import annotations

import logging
from typing import Any, Callable

import requests

from .auth import SESSION_PATH, AuthManager, Session
from .cache import ASSIGNABLE_USERS, ISSUE_TYPES, PROJECTS, ReferenceCache
from .config import AuthMode, JiraConfig
from .pagination import PAGE_SIZE, collect_short_pages, collect_until_total
from .transport import read_response, send

logger = logging.getLogger(__name__)

API = "/rest/api/2"
MAX_ATTEMPTS = 2


class JiraClient:
    def __init__(self, config: JiraConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self.http = session or requests.Session()
        self.http.headers.update({"Accept": "application/json"})
        self.auth = AuthManager(config, self.http)
        self.cache = ReferenceCache()

    @property
    def session(self) -> Session | None:
        return self.auth.session

    def add_post_login_hook(self, hook: Callable[[Session], None]) -> None:
        self.auth.add_hook(hook)

    def login(self, username: str | None = None, secret: str | None = None) -> Session:
        return self.auth.login(username, secret)

    def logout(self) -> None:
        session = self.auth.session
        try:
            if session is not None and session.mode is AuthMode.COOKIE:
                response = send(self.http, self.config, "DELETE", SESSION_PATH, headers=session.auth_headers())
                read_response(response)
        finally:
            self.auth.clear()
            self.cache.clear()
            self.http.cookies.clear()
            logger.info("Logged out of %s", self.config.base_url)

    def call(self, path: str, method: str = "GET", body: Any = None, **kwargs: Any) -> Any:
        if self.auth.session is None:
            self.auth.login()

        attempt = 1
        while True:
            response = send(
                self.http,
                self.config,
                method,
                path,
                body=body,
                headers=self.auth.session.auth_headers(),
                **kwargs,
            )
            if response.status_code == 401 and attempt < MAX_ATTEMPTS:
                logger.warning("Jira session expired during %s %s, logging in again", method, path)
                self.auth.relogin()
                attempt += 1
                continue
            return read_response(response, retried=attempt > 1)

    def search_issues(
        self,
        jql: str,
        fields: list[str] | None = None,
        limit: int | None = None,
        max_pages: int | None = None,
    ) -> list[dict[str, Any]]:
        def fetch_page(start_at: int, max_results: int) -> dict[str, Any]:
            body: dict[str, Any] = {"jql": jql, "startAt": start_at, "maxResults": max_results}
            if fields:
                body["fields"] = fields
            data = self.call(f"{API}/search", "POST", body) or {}
            return {"items": data.get("issues", []), "total": data.get("total", 0)}

        return collect_until_total(fetch_page, PAGE_SIZE, limit=limit, max_pages=max_pages)

    def find_assignable_users(
        self,
        project: str | None = None,
        issue_key: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        if bool(project) == bool(issue_key):
            raise ValueError("Exactly one of project or issue_key is required")
        scope = {"project": project} if project else {"issueKey": issue_key}

        def fetch_page(start_at: int, max_results: int) -> dict[str, Any]:
            params = {**scope, "startAt": start_at, "maxResults": max_results}
            return {"items": self.call(f"{API}/user/assignable/search", params=params) or []}

        return collect_short_pages(fetch_page, PAGE_SIZE, limit=limit)

    def get_projects(self) -> list[dict[str, Any]]:
        return self.cache.get_or_fetch(PROJECTS, lambda: self.call(f"{API}/project"))

    def get_issue_types(self) -> list[dict[str, Any]]:
        return self.cache.get_or_fetch(ISSUE_TYPES, lambda: self.call(f"{API}/issuetype"))

    def get_assignable_users(self, project: str) -> list[dict[str, Any]]:
        return self.cache.get_or_fetch(
            ASSIGNABLE_USERS,
            lambda: self.find_assignable_users(project=project),
            key=project,
        )

    def get_issue(self, issue_key: str, fields: list[str] | None = None) -> dict[str, Any]:
        params = {"fields": ",".join(fields)} if fields else None
        return self.call(f"{API}/issue/{issue_key}", params=params)

    def create_issue(self, fields: dict[str, Any]) -> dict[str, Any]:
        return self.call(f"{API}/issue", "POST", {"fields": fields})

    def update_issue(self, issue_key: str, fields: dict[str, Any]) -> None:
        self.call(f"{API}/issue/{issue_key}", "PUT", {"fields": fields})

    def add_comment(self, issue_key: str, body: str) -> dict[str, Any]:
        return self.call(f"{API}/issue/{issue_key}/comment", "POST", {"body": body})

    def get_transitions(self, issue_key: str) -> list[dict[str, Any]]:
        data = self.call(f"{API}/issue/{issue_key}/transitions") or {}
        return data.get("transitions", [])

    def transition_issue(self, issue_key: str, transition_id: str, fields: dict[str, Any] | None = None) -> None:
        body: dict[str, Any] = {"transition": {"id": transition_id}}
        if fields:
            body["fields"] = fields
        self.call(f"{API}/issue/{issue_key}/transitions", "POST", body)

    def add_worklog(self, issue_key: str, time_spent: str, comment: str | None = None) -> dict[str, Any]:
        body = {"timeSpent": time_spent}
        if comment:
            body["comment"] = comment
        return self.call(f"{API}/issue/{issue_key}/worklog", "POST", body)
