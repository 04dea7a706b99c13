import logging
from typing import Dict, Iterable, List

from fanscore.schemas import (
    AreaMultiplierTable,
    EventRecord,
    EventScoreDetail,
    Fan,
    FanScoreResult,
    ScoringSettings,
)
from fanscore.services.diminishing import DiminishingReturnsTracker
from fanscore.services.distance import resolve_distance_multiplier
from fanscore.services.money import apply_money_transform

logger = logging.getLogger(__name__)


class ScoreCalculator:
    def __init__(self, settings: ScoringSettings, multiplier_table: AreaMultiplierTable):
        self.settings = settings
        self.multiplier_table = multiplier_table

    def calculate(self, records: Iterable[EventRecord], fans: Iterable[Fan]) -> List[FanScoreResult]:
        fan_map = {f.id: f for f in fans}

        # 1. Group by fan, keeping first-seen order (used as the tie order when ranking)
        records_by_fan: Dict[str, List[EventRecord]] = {}
        for record in records:
            records_by_fan.setdefault(record.fan_id, []).append(record)

        results: List[FanScoreResult] = []
        skipped = 0

        for fan_id, fan_records in records_by_fan.items():
            fan = fan_map.get(fan_id)
            if fan is None:
                skipped += len(fan_records)
                continue

            # 2. Chronological order drives diminishing returns (stable for equal dates)
            ordered = sorted(fan_records, key=lambda r: r.date)
            results.append(self._score_fan(fan, ordered))

        if skipped:
            logger.warning(f"Skipped {skipped} record(s) referencing unknown fans")
        logger.debug(f"Scored {len(results)} fan(s) from {sum(len(v) for v in records_by_fan.values())} record(s)")

        return results

    def _score_fan(self, fan: Fan, records: List[EventRecord]) -> FanScoreResult:
        settings = self.settings
        coeff = settings.money_coefficients

        # 3. Occurrence counts start over for every fan and every call
        tracker = DiminishingReturnsTracker(settings.diminishing_returns)

        action_score = 0.0
        money_score = 0.0
        travel_contribution = 0.0
        details: List[EventScoreDetail] = []

        for record in records:
            base = settings.base_points.get(record.event_type, 0)
            dist_mult = resolve_distance_multiplier(fan.residence_area, record.venue_area, self.multiplier_table)
            dim_mult = tracker.observe(record.event_type)

            action_point = record.attend_count * base * dist_mult * dim_mult

            # Merch bought on the road gets the same travel multiplier as attendance
            merch_transformed = apply_money_transform(record.merch_amount, settings.money_mode)
            merch_point = merch_transformed * coeff.merch_coeff * dist_mult

            # Donations are channel-agnostic: no travel multiplier
            donation_transformed = apply_money_transform(record.donation_amount, settings.money_mode)
            donation_point = donation_transformed * coeff.donation_coeff

            # Share of action + merch owed only to the distance multiplier
            without_dist = record.attend_count * base * dim_mult + merch_transformed * coeff.merch_coeff
            travel_delta = (action_point + merch_point) - without_dist

            action_score += action_point
            money_score += merch_point + donation_point
            travel_contribution += travel_delta

            details.append(
                EventScoreDetail(
                    log_id=record.id,
                    event_type=record.event_type,
                    action_point=action_point,
                    merch_point=merch_point,
                    donation_point=donation_point,
                    distance_multiplier=dist_mult,
                    diminish_multiplier=dim_mult,
                    travel_delta=travel_delta,
                )
            )

        return FanScoreResult(
            fan_id=fan.id,
            display_name=fan.display_name,
            residence_area=fan.residence_area,
            action_score=action_score,
            money_score=money_score,
            travel_contribution=travel_contribution,
            details=details,
        )


def calculate(
    records: Iterable[EventRecord],
    fans: Iterable[Fan],
    settings: ScoringSettings,
    multiplier_table: AreaMultiplierTable,
) -> List[FanScoreResult]:
    """Score whatever record subset the caller passes in (one month, all time, ...)."""
    return ScoreCalculator(settings, multiplier_table).calculate(records, fans)
