"""Catalog filtering by free text and price band."""

from decimal import Decimal
from enum import Enum

from inventory.ledger.product import Product
from shared.config import get_settings


class PriceBand(Enum):
    LOW = "low"
    MID = "mid"
    HIGH = "high"


def in_price_band(price: Decimal, band: PriceBand, low_ceiling=None, high_floor=None) -> bool:
    settings = get_settings()
    low_ceiling = Decimal(settings.price_band_low if low_ceiling is None else low_ceiling)
    high_floor = Decimal(settings.price_band_high if high_floor is None else high_floor)

    if band is PriceBand.LOW:
        return price < low_ceiling
    if band is PriceBand.MID:
        return low_ceiling <= price <= high_floor
    return price > high_floor


def filter_products(products, query: str = "", price_band: PriceBand | str | None = None) -> list[Product]:
    """Products whose text contains ``query`` (case-insensitive) and whose price falls in ``price_band``."""
    needle = (query or "").strip().lower()
    band = PriceBand(price_band) if isinstance(price_band, str) else price_band

    return [
        product
        for product in products
        if (not needle or needle in product.searchable_text())
        and (band is None or in_price_band(product.price, band))
    ]
