import pytest

from fakes import FakeResponse
from jiracore.config import AuthMode
from jiracore.errors import PaginationStalled
from jiracore.pagination import collect_short_pages, collect_until_total


class PagedSource:
    def __init__(self, pages, total=None):
        self.pages = list(pages)
        self.total = total
        self.calls = []

    def __call__(self, offset, page_size):
        self.calls.append((offset, page_size))
        page = {"items": self.pages.pop(0) if self.pages else []}
        if self.total is not None:
            page["total"] = self.total
        return page


def test_short_pages_concatenate_in_fetch_order():
    source = PagedSource([[1, 2, 3], [4, 5, 6], [7]])

    items = collect_short_pages(source, page_size=3)

    assert items == [1, 2, 3, 4, 5, 6, 7]
    assert source.calls == [(0, 3), (3, 3), (6, 3)]


def test_short_pages_offset_ignores_returned_count():
    source = PagedSource([[1, 2, 3], [4, 5, 6], []])

    collect_short_pages(source, page_size=3)

    assert [offset for offset, _ in source.calls] == [0, 3, 6]


def test_short_pages_respects_limit():
    source = PagedSource([[1, 2, 3], [4, 5, 6], [7, 8, 9]])

    items = collect_short_pages(source, page_size=3, limit=4)

    assert items == [1, 2, 3, 4]
    assert len(source.calls) == 2


def test_total_pages_follow_accumulated_length():
    source = PagedSource([[1, 2], [3, 4, 5], [6]], total=6)

    items = collect_until_total(source, page_size=3)

    assert items == [1, 2, 3, 4, 5, 6]
    assert [offset for offset, _ in source.calls] == [0, 2, 5]


def test_total_matches_first_page_report():
    source = PagedSource([list(range(1000)), list(range(1000, 2000)), list(range(2000, 2500))], total=2500)

    items = collect_until_total(source, page_size=1000)

    assert len(items) == 2500
    assert source.calls == [(0, 1000), (1000, 1000), (2000, 1000)]


def test_total_missing_stops_after_first_page():
    source = PagedSource([[1, 2]])
    assert collect_until_total(source, page_size=10) == [1, 2]
    assert len(source.calls) == 1


def test_total_respects_limit():
    source = PagedSource([[1, 2, 3], [4, 5, 6]], total=100)

    items = collect_until_total(source, page_size=3, limit=5)

    assert items == [1, 2, 3, 4, 5]
    assert len(source.calls) == 2


def test_empty_page_below_total_does_not_advance():
    source = PagedSource([[1, 2], [], [], [3]], total=3)

    items = collect_until_total(source, page_size=2)

    assert items == [1, 2, 3]
    assert [offset for offset, _ in source.calls] == [0, 2, 2, 2]


def test_max_pages_bounds_a_stalled_search():
    source = PagedSource([[1, 2]], total=5)

    with pytest.raises(PaginationStalled):
        collect_until_total(source, page_size=2, max_pages=4)

    assert len(source.calls) == 4


def test_search_issues_pages_through_jql(make_client, fake_session):
    first = [{"key": f"CAD-{index}"} for index in range(1000)]
    second = [{"key": f"CAD-{index}"} for index in range(1000, 1500)]
    fake_session.queue(
        FakeResponse(200, {"issues": first, "total": 1500}),
        FakeResponse(200, {"issues": second, "total": 1500}),
    )
    client = make_client(AuthMode.TOKEN, token="t")

    issues = client.search_issues("project = CAD", fields=["summary", "status"])

    assert len(issues) == 1500
    bodies = [request["json"] for request in fake_session.requests]
    assert bodies[0] == {"jql": "project = CAD", "startAt": 0, "maxResults": 1000, "fields": ["summary", "status"]}
    assert bodies[1]["startAt"] == 1000
    assert all(request["url"].endswith("/rest/api/2/search") for request in fake_session.requests)


def test_find_assignable_users_by_issue(make_client, fake_session):
    fake_session.queue(
        FakeResponse(200, [{"name": f"user{index}"} for index in range(1000)]),
        FakeResponse(200, [{"name": "last"}]),
    )
    client = make_client(AuthMode.TOKEN, token="t")

    users = client.find_assignable_users(issue_key="CAD-1")

    assert len(users) == 1001
    params = [request["params"] for request in fake_session.requests]
    assert params == [
        {"issueKey": "CAD-1", "startAt": 0, "maxResults": 1000},
        {"issueKey": "CAD-1", "startAt": 1000, "maxResults": 1000},
    ]


def test_find_assignable_users_requires_one_scope(make_client):
    client = make_client(AuthMode.TOKEN, token="t")
    with pytest.raises(ValueError):
        client.find_assignable_users()
    with pytest.raises(ValueError):
        client.find_assignable_users(project="CAD", issue_key="CAD-1")


@pytest.mark.parametrize("limit", [0, -1])
def test_non_positive_limit_is_rejected_before_fetching(limit):
    source = PagedSource([[1, 2, 3]], total=3)

    with pytest.raises(ValueError):
        collect_short_pages(source, page_size=10, limit=limit)
    with pytest.raises(ValueError):
        collect_until_total(source, page_size=10, limit=limit)

    assert source.calls == []
