"""`fan` command: one fan's score breakdown, tier progress and history."""
from __future__ import annotations

from typing import Optional

import click

from fanscore.config import Settings
from fanscore.config.constants import AREA_LABELS, EVENT_TYPE_LABELS
from fanscore.services.reports import fan_score_summary

from ..context import dispatch_errors, load_snapshot_for
from ..output import print_json, print_table
from ..parsing import parse_day


@click.command("fan")
@click.argument("fan_id")
@click.option("--today", help="Reference date YYYY-MM-DD for the current month and history")
@click.option("--months", type=click.IntRange(min=1), help="Months of history to show (defaults to FANSCORE_HISTORY_MONTHS)")
@click.option("--json-output", is_flag=True, help="Print raw JSON")
@click.pass_context
@dispatch_errors
def fan_cmd(ctx: click.Context, fan_id: str, today: Optional[str], months: Optional[int], json_output: bool) -> None:
    """Show a fan's scores, tier and monthly history."""
    settings: Settings = ctx.obj["settings"]
    snapshot = load_snapshot_for(ctx)

    summary = fan_score_summary(
        snapshot,
        fan_id,
        today=parse_day(today, "today"),
        history_months=months if months is not None else settings.history_months,
        recent_limit=settings.recent_log_limit,
    )

    if json_output:
        print_json(summary.model_dump(mode="json"))
        return

    fan = summary.fan
    click.echo(f"{fan.display_name} ({fan.id}) / {AREA_LABELS.get(fan.residence_area, fan.residence_area)}")

    click.echo("Scores:")
    score_rows = []
    for label, breakdown in (("cumulative", summary.cumulative_score), ("this month", summary.current_month_score)):
        score_rows.append(
            {
                "period": label,
                "total": breakdown.total_score,
                "action": breakdown.action_score,
                "money": breakdown.money_score,
                "travel": breakdown.travel_contribution,
            }
        )
    print_table(score_rows, ["period", "total", "action", "money", "travel"])

    current = summary.current_tier.name if summary.current_tier else "-"
    if summary.next_tier:
        click.echo(f"Tier: {current} -> {summary.next_tier.name} ({summary.tier_progress:.0f}%)")
    else:
        click.echo(f"Tier: {current} (top)")

    click.echo("History:")
    print_table(
        [m.model_dump() for m in summary.monthly_history],
        ["month", "total_score", "action_score", "money_score", "travel_contribution"],
    )

    if summary.recent_records:
        click.echo("Recent records:")
        print_table(
            [
                {
                    "date": r.date.strftime("%Y-%m-%d"),
                    "event": EVENT_TYPE_LABELS.get(r.event_type, r.event_type),
                    "venue": AREA_LABELS.get(r.venue_area, r.venue_area),
                    "attend": r.attend_count,
                    "merch": int(r.merch_amount),
                    "donation": int(r.donation_amount),
                }
                for r in summary.recent_records
            ],
            ["date", "event", "venue", "attend", "merch", "donation"],
        )

    stats = summary.stats
    click.echo(
        f"Events: {stats.total_events} / merch: {int(stats.total_merch_spent)} / donations: {int(stats.total_donation_spent)}"
    )
