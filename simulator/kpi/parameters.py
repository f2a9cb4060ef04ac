from __future__ import annotations
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Mapping
import math


class InvalidInput(ValueError):
    """Raised when a parameter or toggle snapshot cannot be used."""


@dataclass(frozen=True)
class BusinessParameters:
    annual_sales: float  # currency units / year

    # Cost structure, whole-number percentages of sales (32 == 32%)
    raw_material_pct: float
    labor_pct: float
    logistics_pct: float
    opex_pct: float

    # Working capital days
    inventory_days: int    # DIO
    receivable_days: int   # DSO
    payable_days: int      # DPO

    fixed_assets: float
    effective_tax_rate: float  # 0..1

    @property
    def cogs_pct(self) -> float:
        return self.raw_material_pct + self.labor_pct + self.logistics_pct

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_mapping(data: Mapping[str, Any], base: "BusinessParameters | None" = None) -> "BusinessParameters":
        """Build a snapshot from a plain mapping; missing keys come from `base`."""
        base = base or DEFAULT_PARAMETERS
        known = {f.name for f in fields(BusinessParameters)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidInput(f"unknown parameter(s): {', '.join(unknown)}")
        updates: Dict[str, Any] = {}
        for k, v in data.items():
            if isinstance(v, bool) or v is None:
                raise InvalidInput(f"{k} must be a number")
            try:
                num = float(v)
            except (TypeError, ValueError, OverflowError):
                raise InvalidInput(f"{k} must be a number") from None
            if k in _DAY_FIELDS:
                if not math.isfinite(num) or num != int(num):
                    raise InvalidInput(f"{k} must be a whole number of days")
                updates[k] = int(num)
            else:
                updates[k] = num
        return replace(base, **updates)


_DAY_FIELDS = ("inventory_days", "receivable_days", "payable_days")
_PCT_FIELDS = ("raw_material_pct", "labor_pct", "logistics_pct", "opex_pct")

DEFAULT_PARAMETERS = BusinessParameters(
    annual_sales=5_000_000.0,
    raw_material_pct=32.0,
    labor_pct=18.0,
    logistics_pct=7.0,
    opex_pct=16.0,
    inventory_days=60,
    receivable_days=45,
    payable_days=35,
    fixed_assets=2_000_000.0,
    effective_tax_rate=0.25,
)

# Preset effective tax rates offered to users; any rate in [0, 1] is accepted.
TAX_RATE_CHOICES = (0.0, 0.19, 0.25, 0.30)


def validate_parameters(p: BusinessParameters) -> None:
    for f in fields(p):
        v = getattr(p, f.name)
        if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
            raise InvalidInput(f"{f.name} must be a finite number")
    if p.annual_sales < 0:
        raise InvalidInput("annual sales must be >= 0")
    for name in _PCT_FIELDS:
        if getattr(p, name) < 0:
            raise InvalidInput(f"{name} must be >= 0")
    for name in _DAY_FIELDS:
        days = getattr(p, name)
        if days < 0 or days != int(days):
            raise InvalidInput(f"{name} must be a non-negative whole number of days")
    if p.fixed_assets < 0:
        raise InvalidInput("fixed assets must be >= 0")
    if not (0.0 <= p.effective_tax_rate <= 1.0):
        raise InvalidInput("effective tax rate must be between 0 and 1")
