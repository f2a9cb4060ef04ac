from __future__ import annotations
from typing import Any, Iterable, List, Optional
from datetime import datetime, timezone
import csv
import io

from simulator.config.env import get_export_config
from simulator.kpi.engine import METRIC_FIELDS, RATIO_METRICS
from simulator.levers.scenario import Comparison
from simulator.levers.toggles import LEVER_LABELS, LEVER_NAMES

METRIC_LABELS = {
    "sales": "Sales",
    "cogs": "COGS",
    "opex": "Opex",
    "ebit": "EBIT",
    "gross_margin": "Gross margin",
    "operating_margin": "Operating margin",
    "inventory_value": "Inventory",
    "receivables_value": "Receivables",
    "payables_value": "Payables",
    "working_capital": "Working capital",
    "cash_conversion_cycle": "CCC (days)",
    "net_profit": "Net profit",
    "total_investment": "Total investment",
    "roi": "ROI",
}

TABLE_HEADER = ["Metric", "Base", "WithFeedback", "Delta"]


def format_pct(ratio: float) -> str:
    return f"{ratio * 100:.1f}%"


def format_pp(delta_ratio: float) -> str:
    d = delta_ratio * 100
    sign = "+" if d > 0 else ""
    return f"{sign}{d:.1f}pp"


def format_amount(x: float) -> int:
    return int(round(x))


def _bool(v: bool) -> str:
    return "true" if v else "false"


def write_rows(rows: Iterable[List[Any]]) -> str:
    buf = io.StringIO()
    w = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for r in rows:
        w.writerow(r)
    return buf.getvalue()


def metadata_rows(comparison: Comparison, generated_at: datetime) -> List[List[Any]]:
    p = comparison.parameters
    t = comparison.toggles
    rows: List[List[Any]] = [
        ["Timestamp", generated_at.isoformat()],
        ["Sales", format_amount(p.annual_sales)],
        ["Effective tax rate", p.effective_tax_rate],
        ["DIO", p.inventory_days],
        ["DSO", p.receivable_days],
        ["DPO", p.payable_days],
        ["Raw material %", p.raw_material_pct],
        ["Labor %", p.labor_pct],
        ["Logistics %", p.logistics_pct],
        ["Opex %", p.opex_pct],
        ["Fixed assets", format_amount(p.fixed_assets)],
        ["Levers", ""],
        ["Feedback", _bool(t.feedback_enabled)],
    ]
    for name in LEVER_NAMES:
        rows.append([LEVER_LABELS[name], _bool(getattr(t, name))])
    return rows


def metric_rows(comparison: Comparison) -> List[List[Any]]:
    base, tuned = comparison.base, comparison.tuned
    rows: List[List[Any]] = [list(TABLE_HEADER)]
    for name in METRIC_FIELDS:
        b, w = getattr(base, name), getattr(tuned, name)
        if name in RATIO_METRICS:
            rows.append([METRIC_LABELS[name], format_pct(b), format_pct(w), format_pp(w - b)])
        else:
            rows.append([METRIC_LABELS[name], format_amount(b), format_amount(w), format_amount(w - b)])
    return rows


def write_comparison_csv(comparison: Comparison, generated_at: Optional[datetime] = None) -> str:
    """Metadata block, a blank row, then the Metric/Base/WithFeedback/Delta table."""
    generated_at = generated_at or datetime.now(timezone.utc)
    rows = metadata_rows(comparison, generated_at) + [[]] + metric_rows(comparison)
    return write_rows(rows)


def export_filename(generated_at: Optional[datetime] = None) -> str:
    generated_at = generated_at or datetime.now(timezone.utc)
    prefix = get_export_config().filename_prefix
    return f"{prefix}_{generated_at.date().isoformat()}.csv"
