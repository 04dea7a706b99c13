from datetime import datetime

import pytest

from fanscore.schemas import EventRecord, Fan, ScoringSettings, TierDefinition


@pytest.fixture
def settings():
    return ScoringSettings(
        base_points={"PaidLive": 10, "FreeLive": 5, "PaidStream": 3, "YouTube": 1},
        money_coefficients={"merch_coeff": 0.01, "donation_coeff": 0.02},
        money_mode="sqrt",
        diminishing_returns={"enabled": True, "rate": 0.9, "applies_to": ["PaidLive"]},
    )


@pytest.fixture
def fans():
    return [
        Fan(id="f1", display_name="Aoi", residence_area="KOBE"),
        Fan(id="f2", display_name="Ren", residence_area="TOKYO"),
        Fan(id="f3", display_name="Mio", residence_area="OSAKA"),
    ]


@pytest.fixture
def tiers():
    return [
        TierDefinition(id="t-gold", name="Gold", slug="gold", color="#d4af37", icon="crown", min_score=150, sort_order=1),
        TierDefinition(id="t-silver", name="Silver", slug="silver", color="#c0c0c0", icon="star", min_score=50, sort_order=2),
        TierDefinition(id="t-bronze", name="Bronze", slug="bronze", color="#cd7f32", icon="leaf", min_score=10, sort_order=3),
    ]


@pytest.fixture
def make_record():
    counter = {"n": 0}

    def _make(fan_id, when, event_type="PaidLive", venue_area="KOBE", attend_count=1, merch=0, donation=0, record_id=None):
        counter["n"] += 1
        return EventRecord(
            id=record_id or f"r{counter['n']}",
            date=when if isinstance(when, datetime) else datetime.fromisoformat(when),
            fan_id=fan_id,
            event_type=event_type,
            venue_area=venue_area,
            attend_count=attend_count,
            merch_amount=merch,
            donation_amount=donation,
        )

    return _make
