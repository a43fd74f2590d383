import logging

import pytest

from retail_gui.services.event_bus import EventBus, GUIEvent
from retail_gui.services.navigation_service import NavigationService
from retail_gui.services.operation_guard import (
    CriticalOperation,
    CriticalOperationGuard,
    GuardState,
)


@pytest.fixture
def nav():
    return NavigationService("/a")


@pytest.fixture
def guard(nav):
    return CriticalOperationGuard(nav)


def test_guard_scenario_block_return_cancel(nav, guard):
    cancels = []
    guard.start(CriticalOperation("X", "/a", on_cancel=lambda: cancels.append(1)))
    assert guard.state is GuardState.ACTIVE

    assert nav.request("/b") is False
    assert guard.state is GuardState.BLOCKED
    assert guard.pending_target == "/b"
    assert nav.current_path() == "/a"

    guard.confirm_return()
    assert guard.state is GuardState.ACTIVE
    assert guard.pending_target is None
    assert nav.request("/a") is True
    assert guard.state is GuardState.ACTIVE

    assert nav.request("/b") is False
    assert guard.confirm_cancel() is True
    assert cancels == [1]
    assert guard.state is GuardState.IDLE
    assert nav.current_path() == "/b"
    assert nav.full_navigation_count == 1

    guard.start(CriticalOperation("Y", "/b"))
    assert guard.state is GuardState.ACTIVE


def test_cancel_removes_interception_before_callback_and_navigates_last(nav, guard):
    order = []

    def on_cancel():
        order.append(("cancel", nav.interceptor_count(), nav.current_path()))

    nav.add_full_navigation_listener(lambda path: order.append(("navigate", path)))
    guard.start(CriticalOperation("Sale", "/a", on_cancel=on_cancel))
    nav.request("/reports")
    guard.confirm_cancel()
    assert order == [("cancel", 0, "/a"), ("navigate", "/reports")]


def test_no_close_confirmation_during_post_cancel_navigation(nav, guard):
    close_checks = []
    nav.add_full_navigation_listener(
        lambda path: close_checks.append(nav.request_close().confirmation_requested)
    )
    guard.start(CriticalOperation("Sale", "/a"))
    nav.request("/b")
    guard.confirm_cancel()
    assert close_checks == [False]


def test_second_start_replaces_first(nav, guard, caplog):
    calls = []
    guard.start(CriticalOperation("First", "/a", on_cancel=lambda: calls.append("first")))
    with caplog.at_level(logging.WARNING):
        guard.start(CriticalOperation("Second", "/a", on_cancel=lambda: calls.append("second")))
    assert "replaced" in caplog.text
    assert guard.active_operation.operation_name == "Second"
    nav.request("/b")
    guard.confirm_cancel()
    assert calls == ["second"]


def test_start_twice_installs_interceptors_once(nav, guard):
    guard.start(CriticalOperation("A", "/a"))
    guard.start(CriticalOperation("B", "/a"))
    assert nav.interceptor_count() == 2


@pytest.mark.parametrize("href", ["/a", "/a#totals", "#top", "", "https://example.com/x", "//cdn.example.com/y", "mailto:ops@example.com"])
def test_never_blocked_targets(nav, guard, href):
    guard.start(CriticalOperation("X", "/sales"))
    nav.request(href)
    assert guard.state is GuardState.ACTIVE


def test_return_path_passes(nav, guard):
    guard.start(CriticalOperation("X", "/sales"))
    assert nav.request("/sales") is True
    assert guard.state is GuardState.ACTIVE
    assert nav.current_path() == "/sales"


def test_close_requires_confirmation_only_while_active(nav, guard):
    assert not nav.request_close().confirmation_requested
    guard.start(CriticalOperation("Sale", "/a"))
    req = nav.request_close()
    assert req.confirmation_requested
    assert req.requested_by == ["Sale"]
    guard.end()
    assert not nav.request_close().confirmation_requested


def test_end_is_idempotent_and_clears_everything(nav, guard):
    guard.end()
    assert guard.state is GuardState.IDLE
    guard.start(CriticalOperation("X", "/a"))
    nav.request("/b")
    guard.end()
    guard.end()
    assert guard.state is GuardState.IDLE
    assert guard.pending_target is None
    assert not guard.is_intercepting
    assert nav.interceptor_count() == 0
    assert nav.request("/b") is True


def test_confirm_return_outside_blocked_is_noop(nav, guard):
    guard.confirm_return()
    assert guard.state is GuardState.IDLE
    guard.start(CriticalOperation("X", "/a"))
    guard.confirm_return()
    assert guard.state is GuardState.ACTIVE


def test_confirm_cancel_without_pending_target_does_not_navigate(nav, guard):
    calls = []
    assert guard.confirm_cancel() is False
    guard.start(CriticalOperation("X", "/a", on_cancel=lambda: calls.append(1)))
    assert guard.confirm_cancel() is True
    assert calls == [1]
    assert nav.full_navigation_count == 0
    assert guard.state is GuardState.IDLE


def test_failing_on_cancel_still_resets(nav, guard, caplog):
    def boom():
        raise RuntimeError("form gone")

    guard.start(CriticalOperation("X", "/a", on_cancel=boom))
    nav.request("/b")
    with caplog.at_level(logging.ERROR):
        guard.confirm_cancel()
    assert "on_cancel failed" in caplog.text
    assert guard.state is GuardState.IDLE
    assert nav.current_path() == "/b"


def test_state_listener_sees_transitions(nav, guard):
    states = []
    guard.add_state_listener(states.append)
    guard.start(CriticalOperation("X", "/a"))
    nav.request("/b")
    guard.confirm_return()
    nav.request("/c")
    guard.confirm_cancel()
    assert states == [
        GuardState.ACTIVE,
        GuardState.BLOCKED,
        GuardState.ACTIVE,
        GuardState.BLOCKED,
        GuardState.IDLE,
    ]


def test_events_published():
    bus = EventBus()
    nav = NavigationService("/a", event_bus=bus)
    guard = CriticalOperationGuard(nav, event_bus=bus)
    names = []
    for evt in (
        GUIEvent.OPERATION_STARTED,
        GUIEvent.NAVIGATION_BLOCKED,
        GUIEvent.OPERATION_CANCELLED,
        GUIEvent.NAVIGATED,
    ):
        bus.subscribe(evt, lambda e: names.append(e.name))
    guard.start(CriticalOperation("X", "/a"))
    nav.request("/b")
    guard.confirm_cancel()
    assert names == ["operation_started", "navigation_blocked", "operation_cancelled", "navigated"]


def test_invalid_descriptor_rejected():
    with pytest.raises(ValueError):
        CriticalOperation("", "/a")
    with pytest.raises(ValueError):
        CriticalOperation("X", "")
