from retail_gui.components.empty_state import (
    EmptyStateTemplate,
    EmptyStateWidget,
    empty_state_registry,
    get_empty_state_template,
)


def test_registry_defaults_present():
    keys = set(empty_state_registry.all_keys())
    assert {"no_data", "no_products", "no_sales", "generic_error"} <= keys
    assert "loading" not in keys
    assert get_empty_state_template("generic_error").action_text == "Retry"
    assert get_empty_state_template("missing") is None


def test_widget_renders_template(qtbot):
    w = EmptyStateWidget("no_sales")
    qtbot.addWidget(w)
    assert w.template_key() == "no_sales"
    assert w.title_label.text() == "No Sales"
    assert not w.has_action()
    assert w.action_button.isHidden()


def test_message_override_and_action(qtbot):
    w = EmptyStateWidget("generic_error", message_override="Server unreachable")
    qtbot.addWidget(w)
    keys = []
    w.actionRequested.connect(keys.append)
    assert w.message() == "Server unreachable"
    w.action_button.click()
    assert keys == ["generic_error"]


def test_switch_template(qtbot):
    w = EmptyStateWidget()
    qtbot.addWidget(w)
    w.set_template("no_products")
    assert w.template_key() == "no_products"
    assert "catalog" in w.message()
    w.set_template("unknown_key")
    assert w.title_label.text() == "Unavailable"


def test_custom_template_registration(qtbot):
    empty_state_registry.register(EmptyStateTemplate("no_orders", "No Orders", "Nothing pending."))
    w = EmptyStateWidget("no_orders")
    qtbot.addWidget(w)
    assert w.message() == "Nothing pending."
