from __future__ import annotations

from typing import Any

import pytest

from fakes import FakeProvider, FakeSession
from jiracore.config import AuthMode, JiraConfig
from jiracore.jira_client import JiraClient


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def make_client(fake_session, provider):
    def factory(auth_mode: AuthMode = AuthMode.BASIC, **overrides) -> JiraClient:
        options: dict[str, Any] = {
            "base_url": "https://jira.example.com/",
            "auth_mode": auth_mode,
            "username": "alice",
            "credential_provider": provider,
        }
        options.update(overrides)
        return JiraClient(JiraConfig(**options), session=fake_session)

    return factory
