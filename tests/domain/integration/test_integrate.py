from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from issueflow.domain.integration import (
    ComponentsWithUnprocessedIssues,
    IntegrateIssues,
    IssueCounters,
    IssueProcessingError,
    IssueVisitor,
    IssueVisitors,
)
from issueflow.domain.model import (
    AnalysisMetadata,
    Branch,
    BranchType,
    ComponentStatus,
    IssueStatus,
    OriginalFile,
    Resolution,
)
from issueflow.domain.tracking import CrossBranchTracking, Tracking
from tests.helpers.issues import (
    ANALYSIS_DATE,
    CountingIssueCache,
    StaticIssuesLoader,
    StaticShortBranchTracker,
    StaticTracker,
    make_base,
    make_file,
    make_lifecycle,
    make_raw,
)

if TYPE_CHECKING:
    from issueflow.domain.lifecycle import IssueLifecycle
    from issueflow.domain.model import Component, Issue


SHORT_BRANCH = Branch(name="feature/login", type=BranchType.SHORT, merge_branch="main")


class RecordingVisitor(IssueVisitor):
    def __init__(self) -> None:
        self.events: list[tuple[str, str | None]] = []
        self.snapshots: list[tuple[str | None, IssueStatus | None, bool]] = []

    def before_component(self, component: Component) -> None:
        self.events.append(("before", component.key))

    def on_issue(self, component: Component, issue: Issue) -> None:
        _ = component
        self.events.append(("issue", issue.key))
        self.snapshots.append((issue.key, issue.status, issue.being_closed))

    def after_component(self, component: Component) -> None:
        self.events.append(("after", component.key))


class SpyLifecycle:
    """Record lifecycle calls while delegating to a real lifecycle."""

    def __init__(self, delegate: IssueLifecycle) -> None:
        self.delegate = delegate
        self.calls: list[tuple[str, str | None]] = []
        self.flags_at_transition: list[bool] = []

    def init_new_open_issue(self, issue: Issue) -> None:
        self.delegate.init_new_open_issue(issue)
        self.calls.append(("new", issue.key))

    def merge_existing_open_issue(self, raw: Issue, base: Issue) -> None:
        self.delegate.merge_existing_open_issue(raw, base)
        self.calls.append(("merge", raw.key))

    def copy_existing_open_issue(self, raw: Issue, other: Issue) -> None:
        self.delegate.copy_existing_open_issue(raw, other)
        self.calls.append(("copy", other.key))

    def do_automatic_transition(self, issue: Issue) -> str | None:
        self.flags_at_transition.append(issue.being_closed)
        self.calls.append(("transition", issue.key))
        return self.delegate.do_automatic_transition(issue)


def _integrate(
    *,
    tracker: StaticTracker | None = None,
    short_branch_tracker: StaticShortBranchTracker | None = None,
    loader: StaticIssuesLoader | None = None,
    cache: CountingIssueCache | None = None,
    lifecycle: SpyLifecycle | None = None,
    visitors: list[IssueVisitor] | None = None,
    unprocessed: ComponentsWithUnprocessedIssues | None = None,
    branch: Branch | None = None,
    incremental: bool = False,
) -> IntegrateIssues:
    return IntegrateIssues(
        analysis_metadata=AnalysisMetadata(
            analysis_date=ANALYSIS_DATE, branch=branch, incremental=incremental
        ),
        tracker=tracker or StaticTracker(),  # type: ignore[arg-type]
        short_branch_tracker=short_branch_tracker,  # type: ignore[arg-type]
        issues_loader=loader or StaticIssuesLoader(),
        issue_cache=cache or CountingIssueCache(),
        lifecycle=lifecycle or SpyLifecycle(make_lifecycle()),  # type: ignore[arg-type]
        visitors=IssueVisitors(visitors or []),
        components_with_unprocessed_issues=(
            ComponentsWithUnprocessedIssues() if unprocessed is None else unprocessed
        ),
    )


def test_default_mode_appends_every_raw_and_every_unmatched_base_once() -> None:
    component = make_file()
    r1 = make_raw(line=1, component=component)
    r2 = make_raw(line=2, component=component)
    r3 = make_raw(line=3, component=component)
    b1 = make_base(key="b1", line=1, component=component)
    b2 = make_base(key="b2", line=7, component=component)
    b3 = make_base(key="b3", line=8, component=component)
    cache = CountingIssueCache()
    tracking = Tracking.of([r1, r2, r3], [b1, b2, b3], {r1: b1})

    _integrate(tracker=StaticTracker(tracking), cache=cache).process_component(component)

    assert len(cache.records) == 3 + (3 - 1)
    assert [issue.key for issue in cache.records] == ["key-1", "key-2", "b1", "b2", "b3"]
    closed = [issue for issue in cache.records if issue.being_closed]
    assert [issue.key for issue in closed] == ["b2", "b3"]
    assert all(issue.status is IssueStatus.CLOSED for issue in closed)
    assert all(issue.resolution is Resolution.FIXED for issue in closed)


def test_scenario_matched_and_new_issue_without_closures() -> None:
    component = make_file()
    r1 = make_raw(line=1, component=component)
    r2 = make_raw(line=2, component=component)
    b1 = make_base(key="b1", line=1, component=component, assignee="dana")
    cache = CountingIssueCache()
    lifecycle = SpyLifecycle(make_lifecycle())
    counters = IssueCounters()

    _integrate(
        tracker=StaticTracker(Tracking.of([r1, r2], [b1], {r1: b1})),
        cache=cache,
        lifecycle=lifecycle,
        visitors=[counters],
    ).process_component(component)

    assert len(cache.records) == 2
    assert [issue.key for issue in cache.records] == ["key-1", "b1"]
    assert lifecycle.calls == [
        ("new", "key-1"),
        ("transition", "key-1"),
        ("merge", "b1"),
        ("transition", "b1"),
    ]
    assert r1.key == "b1"
    assert r1.assignee == "dana"
    assert (counters.new, counters.existing, counters.closed) == (1, 1, 0)


def test_scenario_short_branch_copies_issue_from_merge_branch() -> None:
    component = make_file()
    r1 = make_raw(component=component)
    m1 = make_base(key="main-1", component=component, assignee="lee")
    tracking = CrossBranchTracking(
        base_tracking=Tracking.of([r1], []),
        merge_branch_tracking=Tracking.of([r1], [m1], {r1: m1}),
    )
    tracker = StaticTracker()
    cache = CountingIssueCache()
    lifecycle = SpyLifecycle(make_lifecycle())

    _integrate(
        tracker=tracker,
        short_branch_tracker=StaticShortBranchTracker(tracking),
        cache=cache,
        lifecycle=lifecycle,
        branch=SHORT_BRANCH,
    ).process_component(component)

    assert lifecycle.calls == [("copy", "main-1"), ("transition", "key-1")]
    assert ("new", "key-1") not in lifecycle.calls
    assert tracker.calls == []
    assert [issue.key for issue in cache.records] == ["key-1"]
    assert r1.copied
    assert r1.assignee == "lee"
    assert r1.key != m1.key


def test_short_branch_categories_follow_fixed_order() -> None:
    component = make_file()
    fresh = make_raw(line=1, component=component)
    known = make_raw(line=2, component=component)
    copied = make_raw(line=3, component=component)
    branch_base = make_base(key="b-known", line=2, component=component)
    gone = make_base(key="b-gone", line=9, component=component)
    on_main = make_base(key="main-3", line=3, component=component)
    tracking = CrossBranchTracking(
        base_tracking=Tracking.of(
            [fresh, known, copied], [branch_base, gone], {known: branch_base}
        ),
        merge_branch_tracking=Tracking.of([fresh, copied], [on_main], {copied: on_main}),
    )
    cache = CountingIssueCache()

    _integrate(
        short_branch_tracker=StaticShortBranchTracker(tracking),
        cache=cache,
        branch=SHORT_BRANCH,
    ).process_component(component)

    assert [issue.key for issue in cache.records] == ["key-1", "b-known", "key-2", "b-gone"]
    assert gone.status is IssueStatus.CLOSED


def test_scenario_incremental_unchanged_file_reuses_persisted_issues() -> None:
    component = make_file(status=ComponentStatus.SAME)
    persisted = [
        make_base(key="p1", component=component),
        make_base(key="p2", component=component),
        make_base(key="p3", component=component, status=IssueStatus.CONFIRMED),
    ]
    tracker = StaticTracker()
    cache = CountingIssueCache()
    lifecycle = SpyLifecycle(make_lifecycle())
    loader = StaticIssuesLoader(issues={component.uuid: persisted})

    _integrate(
        tracker=tracker,
        loader=loader,
        cache=cache,
        lifecycle=lifecycle,
        incremental=True,
    ).process_component(component)

    assert tracker.calls == []
    assert loader.calls == [component.uuid]
    assert [event for event in cache.events if event[0] == "append"] == [
        ("append", "p1"),
        ("append", "p2"),
        ("append", "p3"),
    ]
    assert lifecycle.calls == [("transition", "p1"), ("transition", "p2"), ("transition", "p3")]


def test_incremental_analysis_still_tracks_changed_files() -> None:
    component = make_file(status=ComponentStatus.CHANGED)
    raw = make_raw(component=component)
    tracker = StaticTracker(Tracking.of([raw], []))
    loader = StaticIssuesLoader()

    _integrate(tracker=tracker, loader=loader, incremental=True).process_component(component)

    assert tracker.calls == [component]
    assert loader.calls == []


def test_short_branch_takes_precedence_over_incremental() -> None:
    component = make_file(status=ComponentStatus.SAME)
    raw = make_raw(component=component)
    short_tracker = StaticShortBranchTracker(
        CrossBranchTracking(Tracking.of([raw], []), Tracking.of([raw], []))
    )
    loader = StaticIssuesLoader()

    _integrate(
        short_branch_tracker=short_tracker,
        loader=loader,
        branch=SHORT_BRANCH,
        incremental=True,
    ).process_component(component)

    assert short_tracker.calls == [component]
    assert loader.calls == []


def test_closure_flag_is_set_before_automatic_transition() -> None:
    component = make_file()
    gone = make_base(key="gone", component=component)
    lifecycle = SpyLifecycle(make_lifecycle())

    _integrate(
        tracker=StaticTracker(Tracking.of([], [gone])), lifecycle=lifecycle
    ).process_component(component)

    assert lifecycle.flags_at_transition == [True]
    assert gone.status is IssueStatus.CLOSED
    assert gone.close_date == ANALYSIS_DATE


def test_visitor_hooks_wrap_issue_notifications() -> None:
    component = make_file()
    raw = make_raw(component=component)
    gone = make_base(key="gone", line=50, component=component)
    visitor = RecordingVisitor()

    _integrate(
        tracker=StaticTracker(Tracking.of([raw], [gone])), visitors=[visitor]
    ).process_component(component)

    assert visitor.events == [
        ("before", component.key),
        ("issue", "key-1"),
        ("issue", "gone"),
        ("after", component.key),
    ]
    assert visitor.snapshots[1] == ("gone", IssueStatus.CLOSED, True)


def test_hooks_run_even_without_issues() -> None:
    component = make_file()
    visitor = RecordingVisitor()
    cache = CountingIssueCache()

    _integrate(
        tracker=StaticTracker(Tracking.of([], [])), cache=cache, visitors=[visitor]
    ).process_component(component)

    assert visitor.events == [("before", component.key), ("after", component.key)]
    assert cache.opens == 1
    assert cache.closes == 1


def test_appender_is_closed_once_after_all_appends() -> None:
    component = make_file()
    raws = [make_raw(line=line, component=component) for line in (1, 2)]
    cache = CountingIssueCache()

    _integrate(
        tracker=StaticTracker(Tracking.of(raws, [])), cache=cache
    ).process_component(component)

    assert cache.events == [("append", "key-1"), ("append", "key-2"), ("close", None)]


def test_tracker_failure_is_wrapped_and_appender_closed() -> None:
    component = make_file("project:src/broken.py")
    cache = CountingIssueCache()
    unprocessed = ComponentsWithUnprocessedIssues([component.uuid])

    with pytest.raises(IssueProcessingError) as excinfo:
        _integrate(
            tracker=StaticTracker(), cache=cache, unprocessed=unprocessed
        ).process_component(component)

    assert str(excinfo.value) == "Fail to process issues of component 'project:src/broken.py'"
    assert excinfo.value.component_key == component.key
    assert isinstance(excinfo.value.__cause__, AssertionError)
    assert cache.closes == 1
    assert component.uuid in unprocessed


def test_visitor_failure_mid_component_still_closes_appender() -> None:
    component = make_file()
    raws = [make_raw(line=line, component=component) for line in (1, 2)]

    class ExplodingVisitor(IssueVisitor):
        def on_issue(self, component: Component, issue: Issue) -> None:
            _ = component
            if issue.key == "key-2":
                raise RuntimeError("boom")

    cache = CountingIssueCache()

    with pytest.raises(IssueProcessingError) as excinfo:
        _integrate(
            tracker=StaticTracker(Tracking.of(raws, [])),
            cache=cache,
            visitors=[ExplodingVisitor()],
        ).process_component(component)

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert cache.events == [("append", "key-1"), ("close", None)]
    assert cache.closes == 1


def test_processed_component_and_its_original_file_leave_unprocessed_set() -> None:
    original = OriginalFile(uuid="old-uuid", key="project:src/old.py")
    component = make_file("project:src/new.py", original_file=original)
    unprocessed = ComponentsWithUnprocessedIssues([component.uuid, "old-uuid", "other-uuid"])

    _integrate(
        tracker=StaticTracker(Tracking.of([], [])), unprocessed=unprocessed
    ).process_component(component)

    assert unprocessed.uuids() == frozenset({"other-uuid"})


def test_short_branch_analysis_requires_short_branch_tracker() -> None:
    with pytest.raises(ValueError, match="requires a short branch tracker"):
        _integrate(branch=SHORT_BRANCH)
