from __future__ import annotations

import os
from dataclasses import dataclass

from ..core.constants import (
    DEFAULT_DAILY_OVERTIME_CAP_MILLIS,
    DEFAULT_DAYS_PER_MONTH_PRORATE,
    DEFAULT_MAX_WORKING_MILLIS_PER_DAY,
)


def get_settings_module() -> str:
    # APP_ENV selects the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "payroll_system.config.production"

    if env in {"test", "testing"}:
        return "payroll_system.config.testing"

    return "payroll_system.config.development"


@dataclass(frozen=True)
class RuleSettings:
    """Read-only business-rule inputs for the ledgers and the payroll engine."""

    daily_overtime_cap_millis: int = DEFAULT_DAILY_OVERTIME_CAP_MILLIS
    days_per_month_prorate: int = DEFAULT_DAYS_PER_MONTH_PRORATE
    max_working_millis_per_day: int = DEFAULT_MAX_WORKING_MILLIS_PER_DAY

    def __post_init__(self):
        for name in ("daily_overtime_cap_millis", "days_per_month_prorate", "max_working_millis_per_day"):
            if int(getattr(self, name)) <= 0:
                raise ValueError(f"{name} must be positive")

    @classmethod
    def from_settings(cls, settings) -> "RuleSettings":
        return cls(
            daily_overtime_cap_millis=int(
                getattr(settings, "OVERTIME_MAX_DURATION_PER_DAY_MILLIS", DEFAULT_DAILY_OVERTIME_CAP_MILLIS)
            ),
            days_per_month_prorate=int(getattr(settings, "PAYROLL_DAYS_PER_MONTH_PRORATE", DEFAULT_DAYS_PER_MONTH_PRORATE)),
            max_working_millis_per_day=int(
                getattr(settings, "PAYROLL_MAX_WORKING_MILLIS_PER_DAY", DEFAULT_MAX_WORKING_MILLIS_PER_DAY)
            ),
        )
