import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from fanscore.config.constants import (
    DEFAULT_AREA_MULTIPLIERS,
    DEFAULT_BASE_POINTS,
    DEFAULT_DIMINISHING_APPLIES_TO,
    DEFAULT_DIMINISHING_ENABLED,
    DEFAULT_DIMINISHING_RATE,
    DEFAULT_DONATION_COEFF,
    DEFAULT_MERCH_COEFF,
    DEFAULT_MONEY_MODE,
    LEGACY_BASE_POINT_KEYS,
    MONEY_MODES,
)

logger = logging.getLogger(__name__)
# (from_area, to_area) -> multiplier
AreaMultiplierTable = Dict[Tuple[str, str], float]


class _Model(BaseModel):
    # Snapshots arrive with camelCase keys; code uses snake_case.
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


# =============================================================================
# Inputs
# =============================================================================


class Fan(_Model):
    id: str
    display_name: str
    residence_area: str
    memo: Optional[str] = None


class EventRecord(_Model):
    """
    参加記録（1件 = 1ファン × 1イベント）
    event_type / venue_area は文字列のまま受け取り、未知の値はエンジン側で無害化する。
    """
    id: str
    date: datetime
    fan_id: str
    event_type: str
    venue_area: str
    attend_count: int = 1
    merch_amount: float = Field(
        0,
        validation_alias=AliasChoices("merch_amount", "merchAmount", "merchAmountJPY"),
    )
    donation_amount: float = Field(
        0,
        validation_alias=AliasChoices(
            "donation_amount", "donationAmount", "superchatAmount", "superchatAmountJPY"
        ),
    )

    @field_validator("date")
    @classmethod
    def _to_naive_utc(cls, value: datetime) -> datetime:
        # オフセット付きはUTCに換算し、naive に揃える（比較・ソートのため）
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class MoneyCoefficients(_Model):
    merch_coeff: float = DEFAULT_MERCH_COEFF
    donation_coeff: float = Field(
        DEFAULT_DONATION_COEFF,
        validation_alias=AliasChoices("donation_coeff", "donationCoeff", "superchatCoeff"),
    )


class DiminishingReturnsConfig(_Model):
    enabled: bool = DEFAULT_DIMINISHING_ENABLED
    rate: float = Field(DEFAULT_DIMINISHING_RATE, gt=0, le=1)
    applies_to: List[str] = Field(
        default_factory=lambda: list(DEFAULT_DIMINISHING_APPLIES_TO),
        validation_alias=AliasChoices("applies_to", "appliesTo", "applyTo"),
    )


class ScoringSettings(_Model):
    """Scoring parameters; each section falls back to its default independently."""

    base_points: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_BASE_POINTS),
        validation_alias=AliasChoices("base_points", "basePoints", "pointsBase"),
    )
    money_coefficients: MoneyCoefficients = Field(
        default_factory=MoneyCoefficients,
        validation_alias=AliasChoices("money_coefficients", "moneyCoefficients", "moneyCoeff"),
    )
    money_mode: str = DEFAULT_MONEY_MODE
    diminishing_returns: DiminishingReturnsConfig = Field(default_factory=DiminishingReturnsConfig)

    @field_validator("base_points", mode="before")
    @classmethod
    def _rename_legacy_base_keys(cls, value):
        if isinstance(value, dict):
            return {LEGACY_BASE_POINT_KEYS.get(k, k): v for k, v in value.items()}
        return value

    @field_validator("money_mode")
    @classmethod
    def _warn_unknown_money_mode(cls, value: str) -> str:
        if value not in MONEY_MODES:
            logger.warning(f"Unknown money mode {value!r}; amounts will be scored linearly")
        return value


class AreaMultiplier(_Model):
    from_area: str
    to_area: str
    multiplier: float = Field(gt=0)


class TierBenefit(_Model):
    id: str
    title: str
    description: Optional[str] = None
    sort_order: int = 0


class TierDefinition(_Model):
    id: str
    name: str
    slug: str = ""
    color: str = ""
    icon: str = ""
    min_score: float
    sort_order: int  # 1 = 最上位
    description: Optional[str] = None
    benefits: List[TierBenefit] = Field(default_factory=list)


def _default_area_multipliers() -> List[AreaMultiplier]:
    return [
        AreaMultiplier(from_area=src, to_area=dst, multiplier=m)
        for src, dst, m in DEFAULT_AREA_MULTIPLIERS
    ]


class Snapshot(_Model):
    """One consistent read of fans, records, settings, multipliers and tiers."""

    fans: List[Fan] = Field(default_factory=list)
    records: List[EventRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("records", "logs", "eventLogs"),
    )
    settings: ScoringSettings = Field(default_factory=ScoringSettings)
    area_multipliers: List[AreaMultiplier] = Field(default_factory=_default_area_multipliers)
    tiers: List[TierDefinition] = Field(default_factory=list)

    def find_fan(self, fan_id: str) -> Optional[Fan]:
        return next((f for f in self.fans if f.id == fan_id), None)


# =============================================================================
# Engine outputs
# =============================================================================


class EventScoreDetail(_Model):
    log_id: str
    event_type: str
    action_point: float
    merch_point: float
    donation_point: float
    distance_multiplier: float
    diminish_multiplier: float
    travel_delta: float


class FanScoreResult(_Model):
    fan_id: str
    display_name: str
    residence_area: str
    action_score: float = 0.0
    money_score: float = 0.0
    travel_contribution: float = 0.0
    details: List[EventScoreDetail] = Field(default_factory=list)

    @computed_field
    @property
    def total_score(self) -> float:
        return self.action_score + self.money_score


class RankedResult(FanScoreResult):
    rank: int


class TierStatus(_Model):
    current_tier: Optional[TierDefinition] = None
    next_tier: Optional[TierDefinition] = None
    progress: float = 0.0


# =============================================================================
# Reports
# =============================================================================


class TierSummary(_Model):
    name: str
    slug: str
    color: str
    icon: str

    @classmethod
    def from_tier(cls, tier: Optional[TierDefinition]) -> Optional["TierSummary"]:
        if tier is None:
            return None
        return cls(name=tier.name, slug=tier.slug, color=tier.color, icon=tier.icon)


class RankingEntry(RankedResult):
    cumulative_total_score: float
    sales_amount: float
    tier: Optional[TierSummary] = None


class ScoreBreakdown(_Model):
    total_score: float = 0.0
    action_score: float = 0.0
    money_score: float = 0.0
    travel_contribution: float = 0.0

    @classmethod
    def from_result(cls, result: Optional[FanScoreResult]) -> "ScoreBreakdown":
        if result is None:
            return cls()
        return cls(
            total_score=result.total_score,
            action_score=result.action_score,
            money_score=result.money_score,
            travel_contribution=result.travel_contribution,
        )


class MonthlyScore(ScoreBreakdown):
    month: str  # YYYY-MM


class FanStats(_Model):
    total_events: int = 0
    total_merch_spent: float = 0.0
    total_donation_spent: float = 0.0
    first_event_date: Optional[datetime] = None
    last_event_date: Optional[datetime] = None
    event_type_breakdown: Dict[str, int] = Field(default_factory=dict)


class FanScoreSummary(_Model):
    fan: Fan
    cumulative_score: ScoreBreakdown
    current_month_score: ScoreBreakdown
    current_tier: Optional[TierDefinition] = None
    next_tier: Optional[TierDefinition] = None
    tier_progress: float = 0.0
    monthly_history: List[MonthlyScore] = Field(default_factory=list)
    recent_records: List[EventRecord] = Field(default_factory=list)
    stats: FanStats = Field(default_factory=FanStats)
