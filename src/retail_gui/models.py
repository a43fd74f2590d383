"""Retail records shown by the section pages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

__all__ = ["Product", "Sale"]


@dataclass
class Product:
    id: str
    name: str
    category: str
    price: float
    stock: int
    min_stock: int = 0
    brand: str = ""
    is_active: bool = True
    is_offer: bool = False
    offer_price: Optional[float] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Sale:
    customer: str
    product: str
    quantity: int
    registered_at: datetime
