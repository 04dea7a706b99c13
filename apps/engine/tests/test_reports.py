from datetime import date, datetime

import pytest

from fanscore.errors import FanNotFoundError
from fanscore.schemas import EventRecord, Snapshot
from fanscore.services.reports import (
    build_ranking,
    fan_score_summary,
    fan_tier_overview,
    month_bounds,
    month_label,
    recent_months,
    records_in_month,
)


@pytest.fixture
def snapshot(settings, fans, tiers, make_record):
    records = [
        # f1 (KOBE): two Osaka lives in Feb, one in March
        make_record("f1", "2025-02-01T18:00:00", venue_area="OSAKA", merch=10000),
        make_record("f1", "2025-02-20T18:00:00", venue_area="OSAKA"),
        make_record("f1", "2025-03-05T18:00:00", venue_area="KOBE", donation=2500),
        # f2 (TOKYO): one big March
        make_record("f2", "2025-03-02T18:00:00", venue_area="KOBE", attend_count=3, merch=40000),
        # f3 (OSAKA): stream only
        make_record("f3", "2025-03-10T20:00:00", event_type="PaidStream", venue_area="ONLINE"),
    ]
    return Snapshot(
        fans=fans,
        records=records,
        settings=settings,
        area_multipliers=[
            {"from_area": "KOBE", "to_area": "OSAKA", "multiplier": 1.2},
            {"from_area": "TOKYO", "to_area": "KOBE", "multiplier": 1.6},
        ],
        tiers=tiers,
    )


def test_recent_months_wraps_year():
    assert recent_months(date(2025, 2, 14), 4) == [(2024, 11), (2024, 12), (2025, 1), (2025, 2)]


def test_month_label_is_zero_padded():
    assert month_label(2025, 3) == "2025-03"


def test_records_in_month(snapshot):
    assert [r.fan_id for r in records_in_month(snapshot.records, 2025, 2)] == ["f1", "f1"]


def test_month_bounds_cover_whole_month():
    assert month_bounds(2024, 2) == (datetime(2024, 2, 1), datetime(2024, 2, 29, 23, 59, 59, 999999))
    assert month_bounds(2025, 12) == (datetime(2025, 12, 1), datetime(2025, 12, 31, 23, 59, 59, 999999))


def test_records_in_month_uses_utc_boundaries(make_record):
    records = [
        make_record("f1", "2025-02-28T23:59:59", record_id="feb-last"),
        make_record("f1", "2025-03-01T00:00:00", record_id="mar-first"),
        EventRecord.model_validate(
            {"id": "tokyo-morning", "date": "2025-03-01T08:00:00+09:00", "fanId": "f1", "eventType": "PaidLive", "venueArea": "KOBE"}
        ),
    ]
    # 08:00 JST on 1 March is still February in UTC
    assert [r.id for r in records_in_month(records, 2025, 2)] == ["feb-last", "tokyo-morning"]
    assert [r.id for r in records_in_month(records, 2025, 3)] == ["mar-first"]


def test_monthly_ranking(snapshot):
    ranking = build_ranking(snapshot, mode="monthly", year=2025, month=3)

    assert [e.fan_id for e in ranking] == ["f2", "f1", "f3"]
    assert [e.rank for e in ranking] == [1, 2, 3]

    f2 = ranking[0]
    # 3 x 10 x 1.6 + sqrt(40000) x 0.01 x 1.6
    assert f2.total_score == pytest.approx(48 + 3.2)
    assert f2.sales_amount == pytest.approx(40000)
    assert f2.cumulative_total_score == pytest.approx(f2.total_score)
    assert f2.tier.name == "Silver"

    f1 = ranking[1]
    # March restarts diminishing: 10 + sqrt(2500) x 0.02
    assert f1.total_score == pytest.approx(11.0)
    assert f1.sales_amount == pytest.approx(2500)
    # Tier is based on all-time score: 12 + 1.2 + 10.8 + (8.1 + 1)
    assert f1.cumulative_total_score == pytest.approx(33.1)
    assert f1.tier.slug == "bronze"

    assert ranking[2].tier is None


def test_monthly_ranking_defaults_to_today(snapshot):
    ranking = build_ranking(snapshot, mode="monthly", today=date(2025, 2, 28))
    assert [e.fan_id for e in ranking] == ["f1"]


def test_cumulative_ranking(snapshot):
    ranking = build_ranking(snapshot, mode="cumulative")

    assert [e.fan_id for e in ranking] == ["f2", "f1", "f3"]
    f1 = next(e for e in ranking if e.fan_id == "f1")
    assert f1.total_score == pytest.approx(33.1)
    assert f1.sales_amount == pytest.approx(12500)


def test_unknown_mode_rejected(snapshot):
    with pytest.raises(ValueError):
        build_ranking(snapshot, mode="weekly")


def test_fan_tier_overview(snapshot):
    overview = fan_tier_overview(snapshot)
    assert overview["f2"].name == "Silver"
    assert overview["f1"].name == "Bronze"
    assert overview["f3"] is None


def test_fan_score_summary(snapshot):
    summary = fan_score_summary(snapshot, "f1", today=date(2025, 3, 31), history_months=3, recent_limit=2)

    assert summary.fan.id == "f1"
    assert summary.cumulative_score.total_score == pytest.approx(33.1)
    assert summary.current_month_score.total_score == pytest.approx(11.0)
    assert summary.current_tier.id == "t-bronze"
    assert summary.next_tier.id == "t-silver"
    assert summary.tier_progress == pytest.approx((33.1 - 10) / (50 - 10) * 100)

    assert [m.month for m in summary.monthly_history] == ["2025-01", "2025-02", "2025-03"]
    assert summary.monthly_history[0].total_score == 0
    # February on its own: 12 + 1.2 + 10.8
    assert summary.monthly_history[1].total_score == pytest.approx(24.0)
    assert summary.monthly_history[1].travel_contribution == pytest.approx(2.2 + 1.8)

    assert [r.date.day for r in summary.recent_records] == [5, 20]

    assert summary.stats.total_events == 3
    assert summary.stats.total_merch_spent == pytest.approx(10000)
    assert summary.stats.total_donation_spent == pytest.approx(2500)
    assert summary.stats.first_event_date.month == 2
    assert summary.stats.last_event_date.month == 3
    assert summary.stats.event_type_breakdown == {"PaidLive": 3}


def test_fan_score_summary_without_records(snapshot):
    summary = fan_score_summary(snapshot.model_copy(update={"records": []}), "f3", today=date(2025, 3, 1))

    assert summary.cumulative_score.total_score == 0
    assert summary.current_tier is None
    assert summary.next_tier.id == "t-bronze"
    assert summary.tier_progress == 0
    assert summary.stats.total_events == 0
    assert len(summary.monthly_history) == 12


def test_fan_score_summary_unknown_fan(snapshot):
    with pytest.raises(FanNotFoundError):
        fan_score_summary(snapshot, "nobody", today=date(2025, 3, 1))
