from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from simulator.kpi.parameters import BusinessParameters, validate_parameters
from simulator.kpi.engine import KPIResult, compute, metric_deltas
from simulator.levers.toggles import LeverToggles
from simulator.levers.transformer import apply_levers


@dataclass(frozen=True)
class Comparison:
    parameters: BusinessParameters
    toggles: LeverToggles
    adjusted: BusinessParameters
    base: KPIResult
    tuned: KPIResult

    @property
    def deltas(self) -> Dict[str, float]:
        return metric_deltas(self.base, self.tuned)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parameters": self.parameters.to_dict(),
            "levers": self.toggles.to_dict(),
            "adjusted_parameters": self.adjusted.to_dict(),
            "base": self.base.to_dict(),
            "tuned": self.tuned.to_dict(),
            "deltas": self.deltas,
        }


def simulate(params: BusinessParameters, toggles: LeverToggles) -> Comparison:
    """Validate, then compute base KPIs and KPIs after the enabled levers."""
    validate_parameters(params)
    base = compute(params)
    adjusted = apply_levers(params, toggles)
    tuned = compute(adjusted)
    return Comparison(parameters=params, toggles=toggles, adjusted=adjusted, base=base, tuned=tuned)
