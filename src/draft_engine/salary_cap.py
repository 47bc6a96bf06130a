"""Salary cap stages and tiered luxury tax."""

from dataclasses import dataclass
from enum import Enum

from src.draft_engine.config import (
    FIRST_APRON,
    HARD_CAP,
    SALARY_FLOOR,
    SOFT_CAP,
    TAX_TIER1_BAND,
    TAX_TIER2_BAND,
    TAX_TIER3_RATE,
    TOTAL_BUDGET,
)


class CapStage(Enum):
    """Where a payroll sits relative to the cap and aprons."""

    BELOW_SOFT_CAP = "Below Soft Cap"
    SOFT_CAP = "Soft Cap"
    FIRST_APRON = "First Apron"
    SECOND_APRON = "Second Apron (Hard Cap)"


@dataclass(frozen=True)
class TaxBreakdown:
    """Luxury tax owed in each tier."""

    tier1: int
    tier2: int
    tier3: int

    @property
    def total(self) -> int:
        return self.tier1 + self.tier2 + self.tier3


def cap_stage(used: int) -> CapStage:
    """Classify a payroll. Each stage includes its upper threshold."""
    if used <= SOFT_CAP:
        return CapStage.BELOW_SOFT_CAP
    if used <= FIRST_APRON:
        return CapStage.SOFT_CAP
    if used <= HARD_CAP:
        return CapStage.FIRST_APRON
    return CapStage.SECOND_APRON


def tax_breakdown(used: int) -> TaxBreakdown:
    """
    Compute the three progressive tax tiers for a payroll.

    Tier 1 taxes up to $31M above the soft cap at 1.5x, tier 2 up to $11M
    above the first apron at 2x, tier 3 everything above the hard cap at 3x.
    Fractional dollars from the 1.5x tier are truncated.
    """
    tier1_excess = min(max(used - SOFT_CAP, 0), TAX_TIER1_BAND)
    tier2_excess = min(max(used - FIRST_APRON, 0), TAX_TIER2_BAND)
    tier3_excess = max(used - HARD_CAP, 0)

    return TaxBreakdown(
        tier1=tier1_excess * 3 // 2,
        tier2=tier2_excess * 2,
        tier3=tier3_excess * TAX_TIER3_RATE,
    )


def tax_owed(used: int) -> int:
    """Total luxury tax owed for a payroll."""
    return tax_breakdown(used).total


def below_salary_floor(used: int) -> bool:
    return used < SALARY_FLOOR


@dataclass
class SalaryCapState:
    """Per-participant payroll tracking."""

    used: int = 0
    total_budget: int = TOTAL_BUDGET

    @property
    def remaining(self) -> int:
        return self.total_budget - self.used

    @property
    def stage(self) -> CapStage:
        return cap_stage(self.used)

    @property
    def tax(self) -> int:
        return tax_owed(self.used)

    def can_afford(self, salary: int) -> bool:
        return self.used + salary <= self.total_budget

    def add_salary(self, salary: int):
        """Charge a newly drafted contract against the payroll."""
        if salary < 0:
            raise ValueError(f"Salary cannot be negative: {salary}")
        self.used += salary
