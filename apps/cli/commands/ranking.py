"""`ranking` command: monthly or all-time fan ranking."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import click

from fanscore.config.constants import AREA_LABELS, RANKING_MODE_MONTHLY, RANKING_MODES
from fanscore.services.reports import build_ranking

from ..config import CliConfig
from ..context import dispatch_errors, load_snapshot_for
from ..errors import ValidationError
from ..output import print_json, print_table
from ..parsing import parse_day, parse_month


@click.command("ranking")
@click.option("--mode", type=click.Choice(RANKING_MODES), help="monthly or cumulative (defaults to config, then monthly)")
@click.option("--month", help="Month to rank as YYYY-MM (monthly mode; defaults to the current month)")
@click.option("--today", help="Reference date YYYY-MM-DD used when --month is omitted")
@click.option("--json-output", is_flag=True, help="Print raw JSON")
@click.pass_context
@dispatch_errors
def ranking_cmd(
    ctx: click.Context,
    mode: Optional[str],
    month: Optional[str],
    today: Optional[str],
    json_output: bool,
) -> None:
    """Rank fans by contribution score."""
    config: CliConfig = ctx.obj["config"]
    mode = mode or config.mode or RANKING_MODE_MONTHLY

    parsed_month = parse_month(month)
    if parsed_month and mode != RANKING_MODE_MONTHLY:
        raise ValidationError("--month only applies to monthly mode")
    year, mon = parsed_month if parsed_month else (None, None)

    snapshot = load_snapshot_for(ctx)
    entries = build_ranking(snapshot, mode=mode, year=year, month=mon, today=parse_day(today, "today"))

    if json_output:
        print_json([entry.model_dump(mode="json") for entry in entries])
        return

    if not entries:
        click.echo("No records in the selected period")
        return

    rows: List[Dict[str, Any]] = [
        {
            "rank": e.rank,
            "fan": e.display_name,
            "area": AREA_LABELS.get(e.residence_area, e.residence_area),
            "total": e.total_score,
            "action": e.action_score,
            "money": e.money_score,
            "travel": e.travel_contribution,
            "cumulative": e.cumulative_total_score,
            "tier": e.tier.name if e.tier else None,
            "sales": int(e.sales_amount),
        }
        for e in entries
    ]
    print_table(rows, ["rank", "fan", "area", "total", "action", "money", "travel", "cumulative", "tier", "sales"])
