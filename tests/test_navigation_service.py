from retail_gui.services.event_bus import EventBus, GUIEvent
from retail_gui.services.navigation_service import NavigationService, is_external


def test_request_navigates_without_interceptors():
    nav = NavigationService("/panel")
    seen = []
    nav.add_listener(seen.append)
    assert nav.request("/products") is True
    assert nav.current_path() == "/products"
    assert seen == ["/products"]
    assert nav.history() == ["/panel", "/products"]


def test_interceptor_can_veto():
    nav = NavigationService("/panel")
    nav.add_link_interceptor(lambda intent: intent.prevent_default())
    assert nav.request("/sales") is False
    assert nav.current_path() == "/panel"


def test_stop_propagation_skips_later_interceptors():
    nav = NavigationService()
    calls = []

    def first(intent):
        calls.append("first")
        intent.stop_propagation()

    nav.add_link_interceptor(first)
    nav.add_link_interceptor(lambda intent: calls.append("second"))
    nav.request("/orders")
    assert calls == ["first"]


def test_intent_carries_source_path():
    nav = NavigationService("/inventory")
    sources = []
    nav.add_link_interceptor(lambda intent: sources.append((intent.source_path, intent.href)))
    nav.request("/reports")
    assert sources == [("/inventory", "/reports")]


def test_fragment_only_link_keeps_path():
    nav = NavigationService("/reports")
    assert nav.request("#chart") is True
    assert nav.current_path() == "/reports"


def test_interceptor_registration_is_idempotent():
    nav = NavigationService()

    def fn(intent):
        pass

    nav.add_link_interceptor(fn)
    nav.add_link_interceptor(fn)
    nav.add_close_interceptor(fn)
    assert nav.interceptor_count() == 2
    nav.remove_link_interceptor(fn)
    nav.remove_close_interceptor(fn)
    nav.remove_close_interceptor(fn)
    assert nav.interceptor_count() == 0


def test_navigate_full_bypasses_interceptors():
    nav = NavigationService("/panel")
    nav.add_link_interceptor(lambda intent: intent.prevent_default())
    rebuilt = []
    nav.add_full_navigation_listener(rebuilt.append)
    nav.navigate_full("/orders")
    assert nav.current_path() == "/orders"
    assert nav.full_navigation_count == 1
    assert rebuilt == ["/orders"]


def test_close_request_collects_reasons():
    nav = NavigationService()
    nav.add_close_interceptor(lambda req: req.request_confirmation("Sale registration"))
    req = nav.request_close()
    assert req.confirmation_requested
    assert req.requested_by == ["Sale registration"]


def test_navigated_event_published():
    bus = EventBus()
    nav = NavigationService("/panel", event_bus=bus)
    payloads = []
    bus.subscribe(GUIEvent.NAVIGATED, lambda e: payloads.append(e.payload))
    nav.request("/sales")
    nav.navigate_full("/panel")
    assert payloads == [{"path": "/sales", "full": False}, {"path": "/panel", "full": True}]


def test_external_link_goes_to_external_listeners():
    nav = NavigationService("/sales")
    opened, moved = [], []
    nav.add_external_listener(opened.append)
    nav.add_listener(moved.append)
    assert nav.request("https://example.com/manual") is True
    assert opened == ["https://example.com/manual"]
    assert moved == []
    assert nav.current_path() == "/sales"
    assert nav.history() == ["/sales"]


def test_vetoed_external_link_is_not_opened():
    nav = NavigationService()
    opened = []
    nav.add_external_listener(opened.append)
    nav.add_link_interceptor(lambda intent: intent.prevent_default())
    assert nav.request("mailto:ventas@example.com") is False
    assert opened == []


def test_is_external():
    assert is_external("https://example.com")
    assert is_external("//cdn.example.com/app.js")
    assert is_external("mailto:ventas@example.com")
    assert not is_external("/products")
    assert not is_external("/products#top")
    assert not is_external("#top")
