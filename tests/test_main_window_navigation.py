import pytest
from PyQt6.QtWidgets import QLabel

from retail_gui.services.navigation_service import NavigationService
from retail_gui.services.operation_guard import CriticalOperationGuard, GuardState
from retail_gui.services.event_bus import EventBus
from retail_gui.services.logging_service import LoggingService
from retail_gui.services.table_data_service import TableDataService
from retail_gui.views.main_window import SECTIONS, MainWindow
from retail_gui.views.pages import Product, ProductCatalogPage, SaleFormPage


PRODUCTS = [
    Product("p1", "Rice 1kg", "Groceries", 1.9, 40, 10),
    Product("p2", "Olive oil", "Groceries", 7.5, 3, 5),
    Product("p3", "Soap", "Cleaning", 0.8, 0),
]


@pytest.fixture
def window(qtbot):
    def build(confirm_close=None, event_bus=None, opened=None):
        nav = NavigationService("/panel")
        guard = CriticalOperationGuard(nav)
        data = TableDataService(30)
        win = MainWindow(
            nav,
            guard,
            pages={
                "/products": lambda: ProductCatalogPage(data, fetch=lambda: list(PRODUCTS)),
                "/sales": lambda: SaleFormPage(guard),
            },
            event_bus=event_bus,
            confirm_close=confirm_close or (lambda reasons: True),
            open_url=opened.append if opened is not None else (lambda href: None),
        )
        qtbot.addWidget(win)
        win.show()
        return win, nav, guard

    return build


def test_sidebar_lists_every_section(window):
    win, _, _ = window()
    assert list(win.links) == [path for path, _ in SECTIONS]
    assert 'href="/reports"' in win.links["/reports"].text()


def test_links_switch_pages(window):
    win, nav, _ = window()
    assert win.activate_link("/products")
    page = win.current_page()
    assert isinstance(page, ProductCatalogPage)
    assert page.table.column_texts("stock") == ["40", "3 (low)", "Out of stock"]
    win.activate_link("/panel")
    win.activate_link("/products")
    assert win.current_page() is page
    assert nav.current_path() == "/products"


def test_link_signal_routes_through_navigation(window):
    win, nav, _ = window()
    win.links["/orders"].linkActivated.emit("/orders")
    assert nav.current_path() == "/orders"
    assert isinstance(win.current_page(), QLabel)


def test_dirty_sale_form_blocks_sections(window):
    win, nav, guard = window()
    win.activate_link("/sales")
    form = win.current_page()
    form.customer_edit.setText("Ana")
    assert guard.state is GuardState.ACTIVE

    assert win.activate_link("/reports") is False
    assert guard.state is GuardState.BLOCKED
    assert win.guard_dialog.isVisible()
    assert win.current_page() is form

    win.guard_dialog.return_button.click()
    assert guard.state is GuardState.ACTIVE
    assert form.customer_edit.text() == "Ana"


def test_cancel_clears_form_and_rebuilds_target(window):
    win, nav, guard = window()
    win.activate_link("/sales")
    form = win.current_page()
    form.product_edit.setText("Soap")
    win.activate_link("/products")
    win.guard_dialog.cancel_button.click()
    assert guard.state is GuardState.IDLE
    assert form.product_edit.text() == ""
    assert nav.current_path() == "/products"
    assert nav.full_navigation_count == 1
    assert isinstance(win.current_page(), ProductCatalogPage)


def test_saving_or_clearing_ends_operation(window):
    win, _, guard = window()
    win.activate_link("/sales")
    form = win.current_page()
    saved = []
    form.saleSaved.connect(saved.append)
    form.quantity_edit.setText("2")
    form.save_button.click()
    assert guard.state is GuardState.IDLE
    assert saved == [{"customer": "", "product": "", "quantity": "2"}]
    form.customer_edit.setText("Luis")
    form.clear_button.click()
    assert guard.state is GuardState.IDLE
    form.customer_edit.setText("x")
    form.customer_edit.setText("")
    assert guard.state is GuardState.IDLE


def test_close_asks_while_operation_active(window):
    asked = []

    def deny(reasons):
        asked.append(reasons)
        return False

    win, _, guard = window(confirm_close=deny)
    win.activate_link("/sales")
    win.current_page().customer_edit.setText("Ana")
    assert win.close() is False
    assert asked == ["Sale registration"]
    guard.end()
    assert win.close() is True
    assert asked == ["Sale registration"]


def test_close_is_never_silently_allowed_while_active(window):
    asked = []

    def deny(reasons):
        asked.append(reasons)
        return False

    win, nav, guard = window(confirm_close=deny)
    win.activate_link("/sales")
    win.current_page().customer_edit.setText("Ana")
    win.activate_link("/reports")
    assert guard.state is GuardState.BLOCKED
    assert win.close() is False
    assert win.isVisible()
    assert asked == ["Sale registration"]
    win.guard_dialog.return_button.click()
    assert win.close() is False
    assert asked == ["Sale registration", "Sale registration"]


def test_status_bar_echoes_guard_activity(window):
    bus = EventBus()
    activity = LoggingService(event_bus=bus)
    activity.attach()
    try:
        win, _, _ = window(event_bus=bus)
        win.activate_link("/sales")
        win.current_page().customer_edit.setText("Ana")
        win.activate_link("/reports")
        assert "Blocked navigation to /reports" in win.statusBar().currentMessage()
    finally:
        activity.detach()


def test_external_links_leave_current_section(window):
    opened = []
    win, nav, guard = window(opened=opened)
    win.activate_link("/sales")
    win.current_page().customer_edit.setText("Ana")
    assert win.activate_link("https://example.com/help") is True
    assert opened == ["https://example.com/help"]
    assert nav.current_path() == "/sales"
    assert guard.state is GuardState.ACTIVE
    assert win.activate_link("/reports") is False
    assert guard.state is GuardState.BLOCKED
