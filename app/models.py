from pydantic import BaseModel, Field
from decimal import Decimal
from typing import Optional


class Seller(BaseModel):
    id: str
    first_name: str
    last_name: str
    start_date: Optional[str] = None
    position: Optional[str] = None


class Product(BaseModel):
    sku: str
    purchase_price: Decimal  # cost of one unit
    name: Optional[str] = None
    category: Optional[str] = None
    sale_price: Optional[Decimal] = None  # list price, not used by the report


class PurchaseItem(BaseModel):
    sku: str
    quantity: int
    sale_price: Decimal
    discount: Decimal = Decimal("0")  # percent, e.g. Decimal("10") for 10 %


class PurchaseRecord(BaseModel):
    seller_id: str
    items: list[PurchaseItem]
    total_amount: Decimal
    total_discount: Decimal = Decimal("0")
    receipt_id: Optional[str] = None
    date: Optional[str] = None
    customer_id: Optional[str] = None


class SalesDataset(BaseModel):
    sellers: list[Seller] = Field(min_length=1)
    products: list[Product] = Field(min_length=1)
    purchase_records: list[PurchaseRecord] = Field(min_length=1)


# ── Working state ────────────────────────────────────────────────────────────

class TopProduct(BaseModel):
    sku: str
    quantity: int


class SellerStats(BaseModel):
    """Running totals for one seller while purchase records are folded in."""

    id: str
    name: str
    revenue: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    sales_count: int = 0
    products_sold: dict[str, int] = Field(default_factory=dict)
    # filled in after ranking
    bonus: Decimal = Decimal("0")
    top_products: list[TopProduct] = Field(default_factory=list)


# ── Response models ──────────────────────────────────────────────────────────

class SellerReport(BaseModel):
    seller_id: str
    name: str
    revenue: Decimal
    profit: Decimal
    sales_count: int
    top_products: list[TopProduct]
    bonus: Decimal
