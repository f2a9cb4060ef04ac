from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict
import logging

from simulator.kpi.parameters import BusinessParameters

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365

# Metrics expressed as fractions of 1; their deltas are reported in percentage points.
RATIO_METRICS = ("gross_margin", "operating_margin", "roi")


def safe_div(a: float, b: float) -> float:
    return float(a) / float(b) if b not in (0, None) else 0.0


@dataclass(frozen=True)
class KPIResult:
    sales: float
    cogs: float
    opex: float
    ebit: float
    gross_margin: float
    operating_margin: float
    inventory_value: float
    receivables_value: float
    payables_value: float
    working_capital: float
    cash_conversion_cycle: float
    net_profit: float
    total_investment: float
    roi: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


METRIC_FIELDS = tuple(f.name for f in fields(KPIResult))


def compute(params: BusinessParameters) -> KPIResult:
    """Derive the KPI set from one parameter snapshot.

    Percentages are whole-number scaled and divided by 100. No rounding is
    applied. With zero sales the margin ratios are 0 by convention.
    """
    sales = float(params.annual_sales)

    cogs = sales * params.cogs_pct / 100
    gross_margin = safe_div(sales - cogs, sales)

    opex = sales * params.opex_pct / 100
    ebit = sales - cogs - opex
    operating_margin = safe_div(ebit, sales)

    # Working capital from days outstanding
    cogs_per_day = cogs / DAYS_PER_YEAR
    sales_per_day = sales / DAYS_PER_YEAR
    inventory_value = cogs_per_day * params.inventory_days
    receivables_value = sales_per_day * params.receivable_days
    payables_value = cogs_per_day * params.payable_days
    working_capital = inventory_value + receivables_value - payables_value
    ccc = params.inventory_days + params.receivable_days - params.payable_days

    net_profit = ebit * (1 - params.effective_tax_rate)
    total_investment = max(0.0, params.fixed_assets + working_capital)
    roi = net_profit / total_investment if total_investment > 0 else 0.0

    logger.debug("computed kpis: ebit=%.2f ccc=%s roi=%.4f", ebit, ccc, roi)
    return KPIResult(
        sales=sales,
        cogs=cogs,
        opex=opex,
        ebit=ebit,
        gross_margin=gross_margin,
        operating_margin=operating_margin,
        inventory_value=inventory_value,
        receivables_value=receivables_value,
        payables_value=payables_value,
        working_capital=working_capital,
        cash_conversion_cycle=ccc,
        net_profit=net_profit,
        total_investment=total_investment,
        roi=roi,
    )


def metric_deltas(base: KPIResult, tuned: KPIResult) -> Dict[str, float]:
    """tuned - base per metric; ratio metrics in percentage points."""
    out: Dict[str, Any] = {}
    for name in METRIC_FIELDS:
        d = getattr(tuned, name) - getattr(base, name)
        out[name] = d * 100 if name in RATIO_METRICS else d
    return out
