"""
Deterministic sample-data generator.

Produces a :class:`SalesDataset` with:
  - N sellers with Indonesian-style names
  - M products across a few categories, cost 40-80 % of list price
  - purchase records (receipts) spread over 2026
    - 1-5 line items each, quantities 1-5
    - ~30 % of line items carry a 5-20 % discount
    - total_amount / total_discount consistent with the line items
"""

import random
from datetime import date, timedelta
from decimal import Decimal

from app.models import Product, PurchaseItem, PurchaseRecord, SalesDataset, Seller

SEED = 42
START = date(2026, 1, 1)

_FIRST_NAMES = ["Ayu", "Budi", "Citra", "Dewi", "Eko", "Fajar", "Gita", "Hadi", "Intan", "Joko"]
_LAST_NAMES = ["Santoso", "Wijaya", "Pratama", "Lestari", "Kusuma", "Hidayat", "Saputra", "Utami"]
_CATEGORIES = ["batik", "silk", "ceramics", "woodwork", "jewellery"]
_POSITIONS = ["Junior Seller", "Seller", "Senior Seller"]

_TWO_DP = Decimal("0.01")


def build_dataset(
    seed: int = SEED,
    sellers: int = 5,
    products: int = 20,
    records: int = 200,
) -> SalesDataset:
    rng = random.Random(seed)

    # ── sellers ──────────────────────────────────────────────────────────────
    seller_rows = [
        Seller(
            id=f"seller_{n}",
            first_name=rng.choice(_FIRST_NAMES),
            last_name=rng.choice(_LAST_NAMES),
            start_date=str(START - timedelta(days=rng.randint(30, 1500))),
            position=rng.choice(_POSITIONS),
        )
        for n in range(1, sellers + 1)
    ]

    # ── products ─────────────────────────────────────────────────────────────
    product_rows = []
    for n in range(1, products + 1):
        category = rng.choice(_CATEGORIES)
        sale_price = Decimal(str(round(rng.uniform(50, 2000), 2)))
        purchase_price = (sale_price * Decimal(str(rng.uniform(0.4, 0.8)))).quantize(_TWO_DP)
        product_rows.append(Product(
            sku=f"SKU_{n:03d}",
            name=f"{category.title()} item {n}",
            category=category,
            purchase_price=purchase_price,
            sale_price=sale_price,
        ))

    # ── purchase records ─────────────────────────────────────────────────────
    record_rows = []
    for n in range(1, records + 1):
        items = []
        total_amount = Decimal("0")
        total_discount = Decimal("0")
        for product in rng.sample(product_rows, rng.randint(1, min(5, len(product_rows)))):
            quantity = rng.randint(1, 5)
            discount = Decimal(rng.choice([5, 10, 15, 20])) if rng.random() < 0.3 else Decimal("0")
            gross = product.sale_price * quantity
            items.append(PurchaseItem(
                sku=product.sku,
                quantity=quantity,
                sale_price=product.sale_price,
                discount=discount,
            ))
            total_amount += gross
            total_discount += (gross * discount / 100).quantize(_TWO_DP)

        record_rows.append(PurchaseRecord(
            receipt_id=f"receipt_{n}",
            date=str(START + timedelta(days=rng.randint(0, 364))),
            seller_id=rng.choice(seller_rows).id,
            customer_id=f"customer_{rng.randint(1, 500)}",
            items=items,
            total_amount=total_amount,
            total_discount=total_discount,
        ))

    return SalesDataset(sellers=seller_rows, products=product_rows, purchase_records=record_rows)
