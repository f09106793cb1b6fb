from __future__ import annotations

from issueflow.domain.integration import (
    CloseIssuesOnRemovedComponents,
    ComponentsWithUnprocessedIssues,
)
from issueflow.domain.model import IssueStatus, Resolution
from tests.helpers.issues import (
    ANALYSIS_DATE,
    CountingIssueCache,
    StaticIssuesLoader,
    make_base,
    make_file,
    make_lifecycle,
)


def test_closes_issues_of_components_left_unprocessed() -> None:
    gone_a = make_file("project:src/a.py", uuid="uuid-a")
    gone_b = make_file("project:src/b.py", uuid="uuid-b")
    loader = StaticIssuesLoader(
        issues={
            "uuid-b": [make_base(key="b1", component=gone_b)],
            "uuid-a": [
                make_base(key="a1", component=gone_a),
                make_base(key="a2", component=gone_a, status=IssueStatus.CONFIRMED),
            ],
        }
    )
    unprocessed = ComponentsWithUnprocessedIssues(["uuid-b", "uuid-a"])
    cache = CountingIssueCache()

    closed = CloseIssuesOnRemovedComponents(
        issues_loader=loader,
        issue_cache=cache,
        lifecycle=make_lifecycle(),
        components_with_unprocessed_issues=unprocessed,
    ).execute()

    assert closed == 3
    assert loader.calls == ["uuid-a", "uuid-b"]
    assert [issue.key for issue in cache.records] == ["a1", "a2", "b1"]
    for issue in cache.records:
        assert issue.being_closed
        assert issue.status is IssueStatus.CLOSED
        assert issue.resolution is Resolution.FIXED
        assert issue.close_date == ANALYSIS_DATE
    assert len(unprocessed) == 0
    assert cache.closes == 1


def test_nothing_left_unprocessed_appends_nothing() -> None:
    cache = CountingIssueCache()

    closed = CloseIssuesOnRemovedComponents(
        issues_loader=StaticIssuesLoader(),
        issue_cache=cache,
        lifecycle=make_lifecycle(),
        components_with_unprocessed_issues=ComponentsWithUnprocessedIssues(),
    ).execute()

    assert closed == 0
    assert cache.records == []
    assert cache.events == [("close", None)]
