from __future__ import annotations
from typing import List

from simulator.kpi.parameters import BusinessParameters
from simulator.levers.scenario import Comparison
from simulator.levers.toggles import LEVER_LABELS, LEVER_NAMES, LeverToggles


def _money(x: float) -> str:
    return f"{x:,.0f}"


def _pct(ratio: float) -> str:
    return f"{ratio * 100:.1f}%"


def impact_summary_md(comparison: Comparison) -> str:
    base, tuned = comparison.base, comparison.tuned
    d = comparison.deltas
    lines = ["# Impact Summary", ""]
    lines.append("## Margins")
    lines.append(
        f"- Operating margin: {_pct(base.operating_margin)} -> {_pct(tuned.operating_margin)}"
        f" ({d['operating_margin']:+.1f}pp)"
    )
    lines.append(f"- Additional EBIT: {_money(d['ebit'])}")
    lines.append("")
    lines.append("## Liquidity")
    lines.append(f"- Cash conversion cycle: {_money(tuned.cash_conversion_cycle)} days"
                 f" (base {_money(base.cash_conversion_cycle)})")
    lines.append(f"- Working capital released: {_money(base.working_capital - tuned.working_capital)}")
    lines.append("")
    lines.append("## ROI")
    lines.append(f"- ROI: {_pct(base.roi)} -> {_pct(tuned.roi)}")
    return "\n".join(lines) + "\n"


def assumptions_md(parameters: BusinessParameters, toggles: LeverToggles) -> str:
    lines = ["# Assumptions", ""]
    for k, v in parameters.to_dict().items():
        lines.append(f"- {k}: {v}")
    lines.append("\n## Levers")
    if not toggles.feedback_enabled:
        lines.append("- feedback disabled: no lever applied")
        return "\n".join(lines) + "\n"
    active: List[str] = [LEVER_LABELS[n] for n in LEVER_NAMES if getattr(toggles, n)]
    if not active:
        lines.append("- none")
    for label in active:
        lines.append(f"- {label}")
    return "\n".join(lines) + "\n"
