from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, List, Tuple
import logging

from simulator.kpi.parameters import BusinessParameters
from simulator.levers.toggles import LeverToggles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeverRule:
    lever: str   # LeverToggles field that enables the rule
    field: str   # BusinessParameters field it adjusts
    factor: float
    rounded: bool = False  # round to whole units after scaling


# Evaluated top to bottom. Each rule reads only its own field.
LEVER_RULES: Tuple[LeverRule, ...] = (
    LeverRule("negotiate_suppliers", "raw_material_pct", 0.95),
    LeverRule("optimize_production", "labor_pct", 0.95),
    LeverRule("optimize_production", "opex_pct", 0.97),
    LeverRule("efficient_logistics", "logistics_pct", 0.90),
    LeverRule("just_in_time", "inventory_days", 0.70, rounded=True),
    LeverRule("improve_collections", "receivable_days", 0.80, rounded=True),
    LeverRule("improve_payments", "payable_days", 1.15, rounded=True),
    LeverRule("predictive_maintenance", "fixed_assets", 0.90, rounded=True),
)

MARGIN_MIX_CUT_PP = 2.0
_EPS = 1e-6


def _apply_rule(rule: LeverRule, value: float) -> float:
    scaled = value * rule.factor
    if rule.rounded:
        # int days stay int; fixed assets round to whole units but stay float
        scaled = round(scaled) if isinstance(value, int) else float(round(scaled))
    return max(0, scaled)


def apply_margin_mix(params: BusinessParameters) -> BusinessParameters:
    """Take a flat 2pp off COGS, spread proportionally over its three components."""
    cogs_pct = params.cogs_pct
    reduced = max(0.0, cogs_pct - MARGIN_MIX_CUT_PP)
    factor = reduced / max(_EPS, cogs_pct)
    return replace(
        params,
        raw_material_pct=params.raw_material_pct * factor,
        labor_pct=params.labor_pct * factor,
        logistics_pct=params.logistics_pct * factor,
    )


def apply_levers(params: BusinessParameters, toggles: LeverToggles) -> BusinessParameters:
    """Return a new snapshot with every enabled lever applied.

    With `feedback_enabled` off the input is returned unchanged. Margin mix
    runs after the table since it reads the already-adjusted cost percentages.
    """
    if not toggles.feedback_enabled:
        return params

    updates: Dict[str, float] = {}
    applied: List[str] = []
    for rule in LEVER_RULES:
        if not getattr(toggles, rule.lever):
            continue
        current = updates.get(rule.field, getattr(params, rule.field))
        updates[rule.field] = _apply_rule(rule, current)
        if rule.lever not in applied:
            applied.append(rule.lever)

    out = replace(params, **updates)
    if toggles.margin_mix:
        out = apply_margin_mix(out)
        applied.append("margin_mix")

    logger.debug("levers applied: %s", ", ".join(applied) or "none")
    return out
