import logging

from fastapi import FastAPI, HTTPException

from app.calculators import DEFAULT_OPTIONS
from app.config import settings
from app.engine import analyze_sales_data
from app.errors import InvalidInputData, LookupFailure, MissingDependency
from app.models import SalesDataset, SellerReport

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="Per-seller revenue, profit, top products and bonus report",
)


def _build_report(dataset: SalesDataset) -> list[SellerReport]:
    try:
        return analyze_sales_data(
            dataset,
            DEFAULT_OPTIONS,
            top_products_limit=settings.TOP_PRODUCTS_LIMIT,
        )
    except InvalidInputData as exc:  # amounts too large to round
        raise HTTPException(400, str(exc))
    except LookupFailure as exc:
        raise HTTPException(422, str(exc))
    except MissingDependency as exc:
        logger.error("Report calculators are not configured: %s", exc)
        raise HTTPException(500, "Report calculators are not configured")


@app.get("/health", summary="Liveness check")
def health():
    return {"status": "ok"}


# ── Reports ──────────────────────────────────────────────────────────────────

@app.post("/api/v1/reports/sales", summary="Build a sales report for the posted data")
def post_sales_report(dataset: SalesDataset):
    rows = _build_report(dataset)
    return {"report": [r.model_dump() for r in rows]}


@app.get("/api/v1/reports/sales/sample", summary="Sales report for the generated sample data")
def get_sample_report():
    from scripts.seed_data import build_dataset
    dataset = build_dataset(
        seed=settings.SAMPLE_SEED,
        sellers=settings.SAMPLE_SELLERS,
        products=settings.SAMPLE_PRODUCTS,
        records=settings.SAMPLE_RECORDS,
    )
    rows = _build_report(dataset)
    return {"report": [r.model_dump() for r in rows]}
