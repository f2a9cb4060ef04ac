from __future__ import annotations
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Mapping

from simulator.kpi.parameters import InvalidInput


@dataclass(frozen=True)
class LeverToggles:
    feedback_enabled: bool = True  # master switch; off means no lever applies
    negotiate_suppliers: bool = True
    optimize_production: bool = True
    efficient_logistics: bool = True
    just_in_time: bool = True
    improve_collections: bool = True
    improve_payments: bool = True
    predictive_maintenance: bool = True
    margin_mix: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "LeverToggles":
        known = {f.name for f in fields(LeverToggles)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidInput(f"unknown lever(s): {', '.join(unknown)}")
        for k, v in data.items():
            if not isinstance(v, bool):
                raise InvalidInput(f"{k} must be true or false")
        return replace(LeverToggles(), **dict(data))


LEVER_NAMES = (
    "negotiate_suppliers",
    "optimize_production",
    "efficient_logistics",
    "just_in_time",
    "improve_collections",
    "improve_payments",
    "predictive_maintenance",
    "margin_mix",
)

LEVER_LABELS = {
    "negotiate_suppliers": "Negotiate suppliers (-5% raw material)",
    "optimize_production": "Optimize production (-5% labor, -3% opex)",
    "efficient_logistics": "Efficient logistics (-10% logistics cost)",
    "just_in_time": "Just-in-time (-30% DIO)",
    "improve_collections": "Improve collections (-20% DSO)",
    "improve_payments": "Improve payments (+15% DPO)",
    "predictive_maintenance": "Predictive maintenance (-10% fixed assets)",
    "margin_mix": "Higher-margin mix (-2pp COGS)",
}
