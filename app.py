import time
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from payoff.collection import calculate_collection_projections
from payoff.config import get_settings
from payoff.errors import ProjectionError
from payoff.logging_config import get_logger, setup_logging
from payoff.optimization import calculate_debt_projections
from payoff.plan_utils import balance_series
from payoff.scenarios import best_plan, compare_baseline_vs_extra, fastest_plan, summarize_debts
from payoff.schemas import CollectionStrategy, PaymentStrategy, ProjectionResult
from payoff.strategies import (
    get_collection_strategy_description,
    get_collection_strategy_name,
    get_strategy_description,
    get_strategy_name,
)
from payoff.utils import format_months, money

setup_logging()
logger = get_logger("app")

# ======================================
# App + CORS
# ======================================
app = FastAPI(
    title="Debt Payoff Projections",
    description="Compare debt repayment strategies month by month",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in prod
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ======================================
# Models
# ======================================
class ProjectionRequest(BaseModel):
    debts: List[Dict[str, Any]]
    extra_payment: float = 0.0
    monthly_budget: Optional[float] = None
    strategies: Optional[List[str]] = None
    start_date: Optional[date] = None
    max_months: Optional[int] = None
    include_breakdown: bool = True


class WhatIfRequest(BaseModel):
    debts: List[Dict[str, Any]]
    extra_payment: float = Field(default=0.0)
    strategy: str = "avalanche"
    monthly_budget: Optional[float] = None
    start_date: Optional[date] = None


class CollectionRequest(BaseModel):
    debts: List[Dict[str, Any]]
    strategies: Optional[List[str]] = None
    probability: Optional[float] = None
    start_date: Optional[date] = None


class SummaryRequest(BaseModel):
    debts: List[Dict[str, Any]]
    payments_made: float = 0.0


# ======================================
# Helpers
# ======================================
def projection_to_record(result: ProjectionResult, include_breakdown: bool = True) -> Dict[str, Any]:
    record = result.model_dump(mode="json", exclude=None if include_breakdown else {"monthly_breakdown"})
    record["name"] = get_strategy_name(result.strategy)
    record["description"] = get_strategy_description(result.strategy)
    record["balance_series"] = balance_series(result)
    record["formatted"] = {
        "months_to_pay_off": format_months(result.months_to_pay_off),
        "total_paid": money(result.total_paid),
        "total_interest": money(result.total_interest),
        "monthly_payment": money(result.monthly_payment),
    }
    return record


def bad_request(e: ProjectionError) -> HTTPException:
    logger.info("Rejected projection input", extra={"error": str(e)})
    return HTTPException(status_code=400, detail=str(e))


# ======================================
# Routes
# ======================================
@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "max_months": get_settings().max_months, "timestamp": time.time()}


@app.get("/api/strategies")
async def list_strategies():
    return {
        "payment": [
            {"id": s.value, "name": get_strategy_name(s), "description": get_strategy_description(s)}
            for s in PaymentStrategy
        ],
        "collection": [
            {"id": s.value, "name": get_collection_strategy_name(s), "description": get_collection_strategy_description(s)}
            for s in CollectionStrategy
        ],
    }


@app.post("/api/projections")
def generate_projections(request: ProjectionRequest):
    try:
        results = calculate_debt_projections(
            request.debts,
            extra_payment=request.extra_payment,
            monthly_budget=request.monthly_budget,
            strategies=request.strategies,
            start_date=request.start_date,
            max_months=request.max_months,
        )
    except ProjectionError as e:
        raise bad_request(e)

    best = best_plan(results)
    fastest = fastest_plan(results)
    return {
        "success": True,
        "empty": not results,
        "projections": [projection_to_record(r, request.include_breakdown) for r in results],
        "best_plan": best.strategy.value if best else None,
        "fastest_plan": fastest.strategy.value if fastest else None,
    }


@app.post("/api/projections/whatif")
def whatif_analysis(request: WhatIfRequest):
    try:
        comparison = compare_baseline_vs_extra(
            request.debts,
            request.extra_payment,
            strategy=request.strategy,
            monthly_budget=request.monthly_budget,
            start_date=request.start_date,
        )
    except ProjectionError as e:
        raise bad_request(e)

    if comparison is None:
        return {"success": True, "empty": True}
    response = {
        "success": True,
        "empty": False,
        "comparable": comparison.comparable,
        "baseline": projection_to_record(comparison.baseline, include_breakdown=False),
        "scenario": projection_to_record(comparison.scenario, include_breakdown=False),
        "savings": {
            "months_saved": comparison.months_saved,
            "interest_saved": comparison.interest_saved,
            "total_saved": comparison.total_saved,
        },
        "formatted": None,
    }
    if comparison.comparable:
        months = comparison.months_saved
        response["formatted"] = {
            "months_saved": format_months(months) if months >= 0 else f"-{format_months(-months)}",
            "interest_saved": money(comparison.interest_saved),
        }
    return response


@app.post("/api/collections")
def generate_collections(request: CollectionRequest):
    try:
        results = calculate_collection_projections(
            request.debts,
            strategies=request.strategies,
            probability=request.probability,
            start_date=request.start_date,
        )
    except ProjectionError as e:
        raise bad_request(e)

    records: List[Dict[str, Any]] = []
    for r in results:
        rec = r.model_dump(mode="json")
        rec["name"] = get_collection_strategy_name(r.collection_strategy)
        rec["description"] = get_collection_strategy_description(r.collection_strategy)
        records.append(rec)
    return {"success": True, "empty": not results, "projections": records}


@app.post("/api/debts/summary")
def debts_summary(request: SummaryRequest):
    try:
        summary = summarize_debts(request.debts, payments_made=request.payments_made)
    except ProjectionError as e:
        raise bad_request(e)
    return {"success": True, "summary": summary.model_dump()}
