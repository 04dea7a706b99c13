"""
集計レポート
エンジン（scoring / ranking / tiers）を組み合わせ、どの記録範囲（当月・累計）を
採点するかをここで決める。
"""
import calendar
from collections import Counter
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple, Union

from fanscore.config.constants import (
    DEFAULT_HISTORY_MONTHS,
    DEFAULT_RECENT_LOG_LIMIT,
    RANKING_MODE_CUMULATIVE,
    RANKING_MODE_MONTHLY,
    RANKING_MODES,
)
from fanscore.errors import FanNotFoundError
from fanscore.schemas import (
    EventRecord,
    Fan,
    FanScoreResult,
    FanScoreSummary,
    FanStats,
    MonthlyScore,
    RankingEntry,
    ScoreBreakdown,
    Snapshot,
    TierSummary,
)
from fanscore.services.ranking import rank_results
from fanscore.services.scoring import ScoreCalculator
from fanscore.services.snapshot import multiplier_table_for
from fanscore.services.tiers import TierClassifier

DateLike = Union[date, datetime]


def month_label(year: int, month: int) -> str:
    return f"{year}-{month:02d}"


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """First and last instant of the month (inclusive, naive UTC)."""
    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, 1), datetime(year, month, last_day, 23, 59, 59, 999999)


def records_in_month(records: Iterable[EventRecord], year: int, month: int) -> List[EventRecord]:
    start, end = month_bounds(year, month)
    return [r for r in records if start <= r.date <= end]


def recent_months(today: DateLike, count: int) -> List[Tuple[int, int]]:
    """(year, month) for the last `count` months ending with today's, oldest first."""
    months: List[Tuple[int, int]] = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year -= 1
            month = 12
    months.reverse()
    return months


def _calculator(snapshot: Snapshot) -> ScoreCalculator:
    return ScoreCalculator(snapshot.settings, multiplier_table_for(snapshot))


def build_ranking(
    snapshot: Snapshot,
    mode: str = RANKING_MODE_MONTHLY,
    year: Optional[int] = None,
    month: Optional[int] = None,
    today: Optional[DateLike] = None,
) -> List[RankingEntry]:
    """
    ランキング（当月 or 累計）
    ティアは表示モードに関わらず累計スコアで判定する。
    """
    if mode not in RANKING_MODES:
        raise ValueError(f"Unknown ranking mode: {mode}")

    calculator = _calculator(snapshot)

    # 1. Pick the record subset
    if mode == RANKING_MODE_CUMULATIVE:
        records = list(snapshot.records)
    else:
        if year is None or month is None:
            today = today or date.today()
            year, month = today.year, today.month
        records = records_in_month(snapshot.records, year, month)

    # 2. Score and rank
    scores = calculator.calculate(records, snapshot.fans)
    ranked = rank_results(scores)

    # 3. Cumulative totals for tier lookup
    if mode == RANKING_MODE_CUMULATIVE:
        cumulative_scores = scores
    else:
        cumulative_scores = calculator.calculate(snapshot.records, snapshot.fans)
    cumulative_map = {s.fan_id: s.total_score for s in cumulative_scores}

    # 4. Sales within the scored subset
    sales: Dict[str, float] = {}
    for r in records:
        sales[r.fan_id] = sales.get(r.fan_id, 0.0) + r.merch_amount + r.donation_amount

    classifier = TierClassifier(snapshot.tiers)
    entries: List[RankingEntry] = []
    for row in ranked:
        cumulative_total = cumulative_map.get(row.fan_id, 0.0)
        entries.append(
            RankingEntry.model_validate(
                {
                    **dict(row),
                    "cumulative_total_score": cumulative_total,
                    "sales_amount": sales.get(row.fan_id, 0.0),
                    "tier": TierSummary.from_tier(classifier.determine(cumulative_total)),
                }
            )
        )
    return entries


def fan_tier_overview(snapshot: Snapshot) -> Dict[str, Optional[TierSummary]]:
    """Tier per fan from all-time scores; fans without records are absent."""
    scores = _calculator(snapshot).calculate(snapshot.records, snapshot.fans)
    classifier = TierClassifier(snapshot.tiers)
    return {s.fan_id: TierSummary.from_tier(classifier.determine(s.total_score)) for s in scores}


def _score_single(calculator: ScoreCalculator, fan: Fan, records: List[EventRecord]) -> Optional[FanScoreResult]:
    results = calculator.calculate(records, [fan])
    return results[0] if results else None


def _fan_stats(records: List[EventRecord]) -> FanStats:
    if not records:
        return FanStats()
    return FanStats(
        total_events=len(records),
        total_merch_spent=sum(r.merch_amount for r in records),
        total_donation_spent=sum(r.donation_amount for r in records),
        first_event_date=records[0].date,
        last_event_date=records[-1].date,
        event_type_breakdown=dict(Counter(r.event_type for r in records)),
    )


def fan_score_summary(
    snapshot: Snapshot,
    fan_id: str,
    today: Optional[DateLike] = None,
    history_months: int = DEFAULT_HISTORY_MONTHS,
    recent_limit: int = DEFAULT_RECENT_LOG_LIMIT,
) -> FanScoreSummary:
    fan = snapshot.find_fan(fan_id)
    if fan is None:
        raise FanNotFoundError(fan_id)

    today = today or date.today()
    calculator = _calculator(snapshot)
    fan_records = sorted((r for r in snapshot.records if r.fan_id == fan_id), key=lambda r: r.date)

    cumulative = _score_single(calculator, fan, fan_records)
    current_month = _score_single(
        calculator, fan, records_in_month(fan_records, today.year, today.month)
    )

    cumulative_total = cumulative.total_score if cumulative else 0.0
    status = TierClassifier(snapshot.tiers).classify(cumulative_total)

    # Each month is scored on its own, so diminishing returns restart monthly
    history: List[MonthlyScore] = []
    for year, month in recent_months(today, history_months):
        result = _score_single(calculator, fan, records_in_month(fan_records, year, month))
        breakdown = ScoreBreakdown.from_result(result)
        history.append(MonthlyScore(month=month_label(year, month), **breakdown.model_dump()))

    recent = list(reversed(fan_records[-recent_limit:])) if recent_limit > 0 else []

    return FanScoreSummary(
        fan=fan,
        cumulative_score=ScoreBreakdown.from_result(cumulative),
        current_month_score=ScoreBreakdown.from_result(current_month),
        current_tier=status.current_tier,
        next_tier=status.next_tier,
        tier_progress=status.progress,
        monthly_history=history,
        recent_records=recent,
        stats=_fan_stats(fan_records),
    )
