"""Section pages hosted by the main window.

``ProductCatalogPage`` shows the catalog through ``DataTableView`` behind a
filter bar (All / Active / Offers / Out of stock). ``SaleFormPage`` is the
reference owner of a critical operation: typing in any of its fields starts
the "Sale registration" operation on the guard, saving or clearing the form
ends it, and the guard's cancel path clears it. Saved sales land in the
history table under the form.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from retail_gui.components.filter_bar import FilterBar
from retail_gui.models import Product, Sale
from retail_gui.services.operation_guard import CriticalOperation, CriticalOperationGuard
from retail_gui.services.table_data_service import TableDataService
from retail_gui.viewmodels.data_table_viewmodel import Column, DataTableViewModel, RowFilter
from retail_gui.views.data_table_view import DataTableView

__all__ = [
    "Product",
    "PRODUCT_COLUMNS",
    "PRODUCT_FILTERS",
    "SALE_COLUMNS",
    "ProductCatalogPage",
    "SaleFormPage",
]


def _stock_label(p: Product) -> str:
    if p.stock <= 0:
        return "Out of stock"
    if p.stock <= p.min_stock:
        return f"{p.stock} (low)"
    return str(p.stock)


def _offer_label(p: Product) -> str:
    if p.is_offer and p.offer_price is not None:
        return f"${p.offer_price:,.2f}"
    return "-"


PRODUCT_COLUMNS: List[Column[Product]] = [
    Column("name", "Product", lambda p: p.name),
    Column("brand", "Brand", lambda p: p.brand),
    Column("category", "Category", lambda p: p.category),
    Column("price", "Price", lambda p: f"${p.price:,.2f}", sort_value=lambda p: p.price),
    Column("stock", "Stock", _stock_label, sort_value=lambda p: p.stock),
    Column(
        "offer",
        "Offer",
        _offer_label,
        sort_value=lambda p: p.offer_price if p.is_offer else None,
    ),
    Column(
        "updated",
        "Updated",
        lambda p: p.updated_at.strftime("%d/%m/%Y") if p.updated_at else "",
        sort_value=lambda p: p.updated_at,
    ),
]

# Filter label -> predicate; None shows everything
PRODUCT_FILTERS: Dict[str, Optional[RowFilter[Product]]] = {
    "All": None,
    "Active": lambda p: p.is_active,
    "Offers": lambda p: p.is_offer,
    "Out of stock": lambda p: p.stock == 0,
}


class ProductCatalogPage(QWidget):
    DATA_KEY = "/api/products"
    EMPTY_MESSAGE = "No products match these filters"

    def __init__(
        self,
        data_service: TableDataService,
        fetch: Callable[[], List[Product]],
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._data_service = data_service
        self._fetch = fetch
        layout = QVBoxLayout(self)
        self.filter_bar = FilterBar(list(PRODUCT_FILTERS))
        self.filter_bar.filterChanged.connect(self.apply_filter)  # type: ignore[attr-defined]
        layout.addWidget(self.filter_bar)
        vm = DataTableViewModel(
            PRODUCT_COLUMNS,
            empty_message=self.EMPTY_MESSAGE,
            caption="Product catalog",
        )
        self.table = DataTableView(viewmodel=vm, empty_template="no_products")
        self.table.retryRequested.connect(self.reload)  # type: ignore[attr-defined]
        layout.addWidget(self.table)
        self.reload()

    def apply_filter(self, name: str) -> None:
        self.table.set_filter(PRODUCT_FILTERS[name])

    def reload(self) -> None:
        self.table.load_from(self._data_service, self.DATA_KEY, self._fetch, refresh=True)


def _sales_since(days: int, now: Callable[[], datetime]) -> RowFilter[Sale]:
    def _match(sale: Sale) -> bool:
        current = now()
        if days == 0:
            return sale.registered_at.date() == current.date()
        return sale.registered_at >= current - timedelta(days=days)

    return _match


SALE_COLUMNS: List[Column[Sale]] = [
    Column("customer", "Customer", lambda s: s.customer),
    Column("product", "Product", lambda s: s.product),
    Column("quantity", "Qty", lambda s: s.quantity, sort_value=lambda s: s.quantity),
    Column(
        "date",
        "Date",
        lambda s: s.registered_at.strftime("%d/%m/%Y %H:%M"),
        sort_value=lambda s: s.registered_at,
    ),
]


class SaleFormPage(QWidget):
    """Minimal sale entry form guarded while it holds input.

    Signals:
        saleSaved: emitted with the captured field values on save.
    """

    PATH = "/sales"
    OPERATION_NAME = "Sale registration"
    SALE_FILTERS = ("All", "Today", "This week")

    saleSaved = pyqtSignal(dict)

    def __init__(
        self,
        guard: CriticalOperationGuard,
        parent: Optional[QWidget] = None,
        *,
        now: Callable[[], datetime] = datetime.now,
    ):
        super().__init__(parent)
        self._guard = guard
        self._now = now
        self._clearing = False
        self._sales: List[Sale] = []
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Register sale"))
        form = QFormLayout()
        self.customer_edit = QLineEdit()
        self.product_edit = QLineEdit()
        self.quantity_edit = QLineEdit()
        form.addRow("Customer", self.customer_edit)
        form.addRow("Product", self.product_edit)
        form.addRow("Quantity", self.quantity_edit)
        layout.addLayout(form)
        buttons = QHBoxLayout()
        self.save_button = QPushButton("Save sale")
        self.save_button.clicked.connect(self.save)  # type: ignore[attr-defined]
        self.clear_button = QPushButton("Clear")
        self.clear_button.clicked.connect(self.clear)  # type: ignore[attr-defined]
        buttons.addWidget(self.save_button)
        buttons.addWidget(self.clear_button)
        layout.addLayout(buttons)
        self._sale_filters: Dict[str, Optional[RowFilter[Sale]]] = {
            "All": None,
            "Today": _sales_since(0, now),
            "This week": _sales_since(7, now),
        }
        self.filter_bar = FilterBar(list(self.SALE_FILTERS))
        self.filter_bar.filterChanged.connect(self._on_sale_filter)  # type: ignore[attr-defined]
        layout.addWidget(self.filter_bar)
        self.history = DataTableView(
            viewmodel=DataTableViewModel(
                SALE_COLUMNS, empty_message="No sales registered", caption="Sales"
            ),
            empty_template="no_sales",
        )
        layout.addWidget(self.history)
        for edit in self._fields():
            edit.textChanged.connect(self._on_field_changed)  # type: ignore[attr-defined]

    def _fields(self) -> List[QLineEdit]:
        return [self.customer_edit, self.product_edit, self.quantity_edit]

    def is_dirty(self) -> bool:
        return any(edit.text().strip() for edit in self._fields())

    def _on_field_changed(self, _text: str) -> None:
        if self._clearing:
            return
        if self.is_dirty():
            if not self._guard.is_operation_active:
                self._guard.start(
                    CriticalOperation(self.OPERATION_NAME, self.PATH, on_cancel=self._reset_fields)
                )
        elif self._guard.is_operation_active:
            self._guard.end()

    def _on_sale_filter(self, name: str) -> None:
        self.history.set_filter(self._sale_filters[name])

    def _reset_fields(self) -> None:
        self._clearing = True
        try:
            for edit in self._fields():
                edit.clear()
        finally:
            self._clearing = False

    def sales(self) -> List[Sale]:
        return list(self._sales)

    def save(self) -> None:
        values = {
            "customer": self.customer_edit.text().strip(),
            "product": self.product_edit.text().strip(),
            "quantity": self.quantity_edit.text().strip(),
        }
        quantity = int(values["quantity"]) if values["quantity"].isdigit() else 0
        self._sales.append(Sale(values["customer"], values["product"], quantity, self._now()))
        self.history.set_rows(self._sales)
        self._guard.end()
        self._reset_fields()
        self.saleSaved.emit(values)

    def clear(self) -> None:
        self._guard.end()
        self._reset_fields()
