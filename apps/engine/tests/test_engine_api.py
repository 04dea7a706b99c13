from datetime import datetime

import pytest

import fanscore
from fanscore.schemas import EventRecord, Fan, ScoringSettings, TierDefinition


def test_public_surface_end_to_end():
    fans = [
        Fan(id="a", display_name="A", residence_area="KOBE"),
        Fan(id="b", display_name="B", residence_area="OSAKA"),
    ]
    records = [
        EventRecord(id="1", date=datetime(2025, 5, 1), fan_id="a", event_type="PaidLive", venue_area="OSAKA"),
        EventRecord(id="2", date=datetime(2025, 5, 1), fan_id="b", event_type="PaidLive", venue_area="KOBE"),
    ]
    table = {("KOBE", "OSAKA"): 1.2, ("OSAKA", "KOBE"): 1.2}

    results = fanscore.calculate(records, fans, ScoringSettings(), table)
    ranked = fanscore.assign_ranks(sorted(results, key=lambda r: r.total_score, reverse=True))

    assert [r.rank for r in ranked] == [1, 1]
    assert [r.fan_id for r in ranked] == ["a", "b"]
    assert fanscore.resolve_distance_multiplier("KOBE", "OSAKA", table) == pytest.approx(1.2)

    tiers = [
        TierDefinition(id="top", name="Top", min_score=10, sort_order=1),
        TierDefinition(id="base", name="Base", min_score=0, sort_order=2),
    ]
    current = fanscore.determine_tier(ranked[0].total_score, tiers)
    assert current.id == "top"
    assert fanscore.get_next_tier(current, tiers) is None
    assert fanscore.calculate_tier_progress(ranked[0].total_score, current, None) == 100.0
