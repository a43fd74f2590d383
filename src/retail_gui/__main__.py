"""Launch the retail desk window: ``python -m retail_gui``."""

from __future__ import annotations

import sys

from retail_gui.app.bootstrap import create_app
from retail_gui.sample_data import sample_products
from retail_gui.services.service_locator import TABLE_DATA
from retail_gui.services.table_data_service import TableDataService


def main() -> int:
    ctx = create_app(headless=False)
    from retail_gui.views.main_window import MainWindow
    from retail_gui.views.pages import ProductCatalogPage, SaleFormPage

    table_data = ctx.services.get_typed(TABLE_DATA, TableDataService)
    window = MainWindow(
        ctx.navigation,
        ctx.guard,
        event_bus=ctx.event_bus,
        pages={
            "/products": lambda: ProductCatalogPage(table_data, fetch=sample_products),
            "/sales": lambda: SaleFormPage(ctx.guard),
        },
    )
    window.resize(1100, 700)
    window.show()
    return ctx.qt_app.exec()  # type: ignore[union-attr]


if __name__ == "__main__":
    sys.exit(main())
