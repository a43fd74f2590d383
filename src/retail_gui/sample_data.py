"""Seed catalog used until a tenant database is connected.

``sample_products`` is a zero-argument fetcher, the shape
``TableDataService.load`` expects, returning fresh copies so pages may sort
and filter without touching the seed.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import List

from .models import Product

__all__ = ["SAMPLE_PRODUCTS", "sample_products"]

SAMPLE_PRODUCTS: List[Product] = [
    Product(
        "prod-1", "Taladro Eléctrico Profesional", "Herramientas Eléctricas",
        43.0, 24, 10, brand="DeWalt", updated_at=datetime(2025, 2, 3, 9, 30),
    ),
    Product(
        "prod-2", "Cepilladora Eléctrica Azul", "Herramientas Eléctricas",
        100.0, 3, 5, brand="Makita", is_offer=True, offer_price=85.0,
        updated_at=datetime(2025, 1, 21, 16, 5),
    ),
    Product(
        "prod-3", "Sierra Eléctrica Azul y Blanca", "Herramientas Eléctricas",
        90.0, 18, 8, brand="Bosch", updated_at=datetime(2025, 2, 10, 11, 0),
    ),
    Product(
        "prod-4", "Juego de Herramientas 30 Piezas", "Accesorios",
        96.0, 0, 5, brand="Stanley", updated_at=datetime(2024, 12, 14, 8, 45),
    ),
    Product(
        "prod-5", "Casco de Seguridad Industrial", "Seguridad Industrial",
        42.0, 45, 15, brand="3M", updated_at=datetime(2025, 1, 7, 13, 20),
    ),
    Product(
        "prod-6", "Audífonos Bluetooth Sony Inalámbricos", "Audio / Electrónica",
        85.0, 7, 10, brand="Sony", is_offer=True, offer_price=69.0,
        updated_at=datetime(2025, 2, 1, 18, 10),
    ),
    Product(
        "prod-7", "Esmeriladora Angular 4½\"", "Herramientas Eléctricas",
        58.0, 11, 6, brand="Black+Decker", is_active=False,
        updated_at=datetime(2024, 11, 30, 10, 0),
    ),
]


def sample_products() -> List[Product]:
    return [replace(p) for p in SAMPLE_PRODUCTS]
