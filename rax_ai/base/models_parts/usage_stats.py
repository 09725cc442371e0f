"""
Usage statistics DTOs decoded from ``/v1/usage``.

The endpoint has reported the reporting window as ``period`` and as
``date_range`` and the per-day rows as ``daily_breakdown`` and as
``breakdown``; both spellings are accepted and exposed through
:attr:`UsageStats.window` and :attr:`UsageStats.days`.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class DateRange(BaseModel):
    model_config = ConfigDict(extra="allow")

    start: str
    end: str


class DailyUsage(BaseModel):
    model_config = ConfigDict(extra="allow")

    date: str
    requests: int = 0
    tokens: int = 0
    cost: float = 0.0


class UsageStats(BaseModel):
    """Aggregate account usage for a reporting window."""

    model_config = ConfigDict(extra="allow")

    total_requests: int = 0
    total_tokens: int = 0
    total_cost: float = 0.0
    period: Optional[DateRange] = None
    date_range: Optional[DateRange] = None
    daily_breakdown: Optional[List[DailyUsage]] = None
    breakdown: Optional[List[DailyUsage]] = None

    @property
    def window(self) -> Optional[DateRange]:
        return self.period or self.date_range

    @property
    def days(self) -> List[DailyUsage]:
        return list(self.daily_breakdown or self.breakdown or [])


__all__ = [
    "DateRange",
    "DailyUsage",
    "UsageStats",
]
