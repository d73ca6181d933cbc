"""
Pydantic schemas for the MetricsSnapshot — the engine's sole output.

Every model is frozen: a snapshot is produced whole per run and never
patched. Optional numeric fields are None when the value is unavailable,
which the presentation layer renders as "N/A" rather than 0.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class GrowthValue(_Frozen):
    """Period-over-period growth of one metric"""
    percent: Optional[float] = Field(None, description="Growth in percent; None when unavailable")
    has_signal: bool = Field(..., description="False when both sides are zero/absent")


class GrowthPoint(_Frozen):
    """Schema for one month-over-month growth point"""
    period: str = Field(..., description="Current period (YYYY-MM)")
    previous_period: str = Field(..., description="Period compared against")
    current: Optional[float] = Field(None, description="Metric value in the current period")
    previous: Optional[float] = Field(None, description="Metric value in the previous period")
    percent: Optional[float] = Field(None, description="Growth in percent")
    has_signal: bool = Field(..., description="False when there is no activity to compare")


class GrowthSeries(_Frozen):
    """Month-over-month growth per dimension"""
    users: List[GrowthPoint] = Field(default_factory=list)
    revenue: List[GrowthPoint] = Field(default_factory=list)
    volume: List[GrowthPoint] = Field(default_factory=list)


class TrendPoint(_Frozen):
    """Schema for one monthly trend point"""
    period: str = Field(..., description="Period (YYYY-MM)")
    transaction_count: Optional[float] = Field(None, description="Cross-currency transaction count")
    revenue_base: Optional[float] = Field(None, description="Revenue converted to base currency")
    volume_base: Optional[float] = Field(None, description="Transaction volume converted to base currency")
    active_users: Optional[float] = Field(None, description="Monthly active users, if exported")


class ActiveUserCounts(_Frozen):
    """Active users in one window"""
    window_start: datetime
    window_end: datetime
    distinct_users: int = Field(..., description="Distinct users active in the window")
    currency_sum: int = Field(..., description="Sum of per-currency counts (double-counts multi-currency users)")
    by_currency: Dict[str, int] = Field(default_factory=dict)


class KeyMetrics(_Frozen):
    """Headline figures for the current period"""
    total_revenue_base: Optional[float] = Field(None, description="Current-period revenue in base currency")
    total_transactions: Optional[float] = Field(None, description="Current-period transaction count")
    all_time_transactions: Optional[float] = Field(None, description="Grand-total transaction count")
    total_users: int = Field(..., description="Registered users")
    active_users: int = Field(..., description="Distinct users active in the current window")
    active_users_currency_sum: int = Field(..., description="Per-currency active counts summed")
    previous_active_users: int = Field(..., description="Distinct users active in the previous window")
    active_user_growth: GrowthValue


class CurrencyGrowthRow(_Frozen):
    """Month-to-date growth for one currency (native currency unless suffixed _base)"""
    currency: str
    exchange_rate: float

    current_transaction_count: Optional[float] = None
    previous_transaction_count: Optional[float] = None
    transaction_count_growth: GrowthValue

    current_transaction_volume: Optional[float] = None
    previous_transaction_volume: Optional[float] = None
    transaction_volume_growth: GrowthValue
    volume_base: Optional[float] = None
    previous_volume_base: Optional[float] = None

    current_revenue: Optional[float] = None
    previous_revenue: Optional[float] = None
    revenue_growth: GrowthValue
    revenue_base: Optional[float] = None
    previous_revenue_base: Optional[float] = None

    current_active_users: int = 0
    previous_active_users: int = 0
    user_growth: GrowthValue


class CurrencySummaryRow(_Frozen):
    """All-time activity for one currency"""
    currency: str
    transactions: Optional[float] = None
    volume: Optional[float] = None
    fees: Optional[float] = None
    fees_base: Optional[float] = None


class SnapshotMeta(_Frozen):
    """Configuration the snapshot was computed with"""
    base_currency: str
    current_period: str
    previous_period: str
    exchange_rates: Dict[str, float]
    rates_version: str
    window_policy: str
    current_window: List[datetime]
    previous_window: List[datetime]
    sheets: List[str] = Field(default_factory=list, description="Sheets present in the input")


class MetricsSnapshot(_Frozen):
    """The complete computed output of one metrics run"""
    meta: SnapshotMeta
    key_metrics: KeyMetrics
    monthly_trends: List[TrendPoint] = Field(default_factory=list)
    growth_rates: GrowthSeries
    mtd_growth: List[CurrencyGrowthRow] = Field(default_factory=list)
    currency_summary: List[CurrencySummaryRow] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)
