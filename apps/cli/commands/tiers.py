"""`tiers` command: current tier of every fan with records."""
from __future__ import annotations

import click

from fanscore.services.reports import fan_tier_overview

from ..context import dispatch_errors, load_snapshot_for
from ..output import print_json, print_table


@click.command("tiers")
@click.option("--json-output", is_flag=True, help="Print raw JSON")
@click.pass_context
@dispatch_errors
def tiers_cmd(ctx: click.Context, json_output: bool) -> None:
    """Show each fan's tier from all-time scores."""
    snapshot = load_snapshot_for(ctx)
    overview = fan_tier_overview(snapshot)

    if json_output:
        print_json({fan_id: tier.model_dump() if tier else None for fan_id, tier in overview.items()})
        return

    rows = []
    for fan_id, tier in overview.items():
        fan = snapshot.find_fan(fan_id)
        rows.append(
            {
                "fan_id": fan_id,
                "fan": fan.display_name if fan else None,
                "tier": tier.name if tier else None,
                "icon": tier.icon if tier else None,
            }
        )
    print_table(rows, ["fan_id", "fan", "tier", "icon"])
