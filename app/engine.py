import logging
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Union

from pydantic import ValidationError

from app.calculators import AnalysisOptions, BonusCalculator, RevenueCalculator
from app.errors import InvalidInputData, LookupFailure, MissingDependency
from app.models import (
    Product,
    SalesDataset,
    SellerReport,
    SellerStats,
    TopProduct,
)

logger = logging.getLogger(__name__)

TOP_PRODUCTS_LIMIT = 10

# Digits kept while folding and rounding; the default context stops at 28.
MONEY_PRECISION = 60

_TWO_DP = Decimal("0.01")


def _round_money(value: Decimal, seller_id: str) -> Decimal:
    try:
        return value.quantize(_TWO_DP, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidInputData(
            f"Amount {value} for seller '{seller_id}' exceeds {MONEY_PRECISION} digits"
        ) from exc


def _to_decimal(value: Any, source: str) -> Decimal:
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        number = Decimal(str(value))
    else:
        raise TypeError(f"{source} returned {type(value).__name__}, expected a number")
    if not number.is_finite():
        raise TypeError(f"{source} returned {value!r}, expected a finite number")
    return number


def _validate_dataset(data: Union[SalesDataset, Mapping, None]) -> SalesDataset:
    if data is None:
        raise InvalidInputData("Sales data is missing")

    if isinstance(data, SalesDataset):
        dataset = data
    elif isinstance(data, Mapping):
        try:
            dataset = SalesDataset.model_validate(data)
        except ValidationError as exc:
            raise InvalidInputData(f"Malformed sales data: {exc.error_count()} error(s)") from exc
    else:
        raise InvalidInputData(f"Sales data must be a mapping, got {type(data).__name__}")

    # model_construct() skips validation, so re-check emptiness here
    for field in ("sellers", "products", "purchase_records"):
        if not getattr(dataset, field, None):
            raise InvalidInputData(f"'{field}' must be a non-empty list")
    return dataset


def _resolve_calculators(
    options: Union[AnalysisOptions, Mapping, None],
) -> tuple[RevenueCalculator, BonusCalculator]:
    if options is None or isinstance(options, (str, bytes, int, float)):
        raise MissingDependency("Analysis options must provide calculate_revenue and calculate_bonus")

    if isinstance(options, Mapping):
        calculate_revenue = options.get("calculate_revenue")
        calculate_bonus = options.get("calculate_bonus")
    else:
        calculate_revenue = getattr(options, "calculate_revenue", None)
        calculate_bonus = getattr(options, "calculate_bonus", None)

    missing = [
        name
        for name, fn in (("calculate_revenue", calculate_revenue), ("calculate_bonus", calculate_bonus))
        if not callable(fn)
    ]
    if missing:
        raise MissingDependency(f"Missing or non-callable option(s): {', '.join(missing)}")
    return calculate_revenue, calculate_bonus


def _top_products(products_sold: dict[str, int], limit: int) -> list[TopProduct]:
    ranked = sorted(products_sold.items(), key=lambda entry: entry[1], reverse=True)
    return [TopProduct(sku=sku, quantity=qty) for sku, qty in ranked[:limit]]


def _build_rows(
    dataset: SalesDataset,
    calculate_revenue: RevenueCalculator,
    calculate_bonus: BonusCalculator,
    top_products_limit: int,
) -> list[SellerReport]:
    # ── 1. One accumulator per seller, plus product lookup ───────────────────
    seller_stats = [
        SellerStats(id=seller.id, name=f"{seller.first_name} {seller.last_name}")
        for seller in dataset.sellers
    ]
    seller_index: dict[str, SellerStats] = {stats.id: stats for stats in seller_stats}
    product_index: dict[str, Product] = {p.sku: p for p in dataset.products}

    # ── 2. Fold purchase records into the accumulators ───────────────────────
    for position, record in enumerate(dataset.purchase_records):
        label = record.receipt_id or f"purchase record #{position}"
        stats = seller_index.get(record.seller_id)
        if stats is None:
            logger.warning("Purchase %s references unknown seller %s", label, record.seller_id)
            raise LookupFailure("seller", record.seller_id, label)

        stats.sales_count += 1
        stats.revenue += record.total_amount - record.total_discount

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                logger.warning("Purchase %s references unknown product %s", label, item.sku)
                raise LookupFailure("product", item.sku, label)

            cost = product.purchase_price * item.quantity
            revenue = _to_decimal(calculate_revenue(item, product), "calculate_revenue")
            stats.profit += revenue - cost
            stats.products_sold[item.sku] = stats.products_sold.get(item.sku, 0) + item.quantity

    # ── 3. Rank by profit and derive bonus / top products ────────────────────
    seller_stats.sort(key=lambda s: s.profit, reverse=True)
    total = len(seller_stats)

    for index, stats in enumerate(seller_stats):
        stats.bonus = _to_decimal(calculate_bonus(index, total, stats), "calculate_bonus")
        stats.top_products = _top_products(stats.products_sold, top_products_limit)

    logger.info(
        "Built sales report for %d sellers from %d purchase records",
        total, len(dataset.purchase_records),
    )

    # ── 4. Shape report rows ─────────────────────────────────────────────────
    return [
        SellerReport(
            seller_id=stats.id,
            name=stats.name,
            revenue=_round_money(stats.revenue, stats.id),
            profit=_round_money(stats.profit, stats.id),
            sales_count=stats.sales_count,
            top_products=stats.top_products,
            bonus=_round_money(stats.bonus, stats.id),
        )
        for stats in seller_stats
    ]


def analyze_sales_data(
    data: Union[SalesDataset, Mapping, None],
    options: Union[AnalysisOptions, Mapping, None],
    *,
    top_products_limit: int = TOP_PRODUCTS_LIMIT,
) -> list[SellerReport]:
    """Build the per-seller performance report.

    Sellers come back ordered by profit, highest first. Equal-profit sellers
    keep their input order. Raises :class:`InvalidInputData`,
    :class:`MissingDependency` or :class:`LookupFailure`; nothing is returned
    on failure.
    """
    if top_products_limit < 1:
        raise ValueError("top_products_limit must be at least 1")

    try:
        dataset = _validate_dataset(data)
        calculate_revenue, calculate_bonus = _resolve_calculators(options)
    except (InvalidInputData, MissingDependency) as exc:
        logger.warning("Rejected sales report request: %s", exc)
        raise

    logger.debug(
        "Analysing %d purchase records for %d sellers across %d products",
        len(dataset.purchase_records), len(dataset.sellers), len(dataset.products),
    )

    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        return _build_rows(dataset, calculate_revenue, calculate_bonus, top_products_limit)
