"""Data records shared by the storage layer and the user interface."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Partner:
    """A business partner together with its computed discount."""

    id: int = 0
    company_name: str = ""
    partner_type: str = ""
    director: str = ""
    phone: str = ""
    rating: int = 0
    sale: int = 0
    email: str = ""
    address: str = ""
    discount: int = 0


@dataclass
class PartnerSale:
    """One sale of a product to a partner."""

    product_name: str
    quantity: int
    sale_date: str
    product_type: str
    total_sum: float