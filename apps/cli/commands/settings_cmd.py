"""`settings` command: effective scoring settings and travel multipliers."""
from __future__ import annotations

import click

from fanscore.config.constants import AREA_LABELS, EVENT_TYPE_LABELS, EVENT_TYPES, NEUTRAL_MULTIPLIER
from fanscore.services.snapshot import multiplier_table_for

from ..context import dispatch_errors, load_snapshot_for
from ..output import print_json, print_table


@click.command("settings")
@click.option("--all-pairs", is_flag=True, help="Include neutral (1.0) multiplier pairs")
@click.option("--json-output", is_flag=True, help="Print raw JSON")
@click.pass_context
@dispatch_errors
def settings_cmd(ctx: click.Context, all_pairs: bool, json_output: bool) -> None:
    """Show the scoring settings in effect for the snapshot."""
    snapshot = load_snapshot_for(ctx)
    settings = snapshot.settings
    table = multiplier_table_for(snapshot)

    if json_output:
        print_json(
            {
                "settings": settings.model_dump(mode="json"),
                "area_multipliers": [
                    {"from_area": src, "to_area": dst, "multiplier": m} for (src, dst), m in table.items()
                ],
            }
        )
        return

    # Known types first; a missing type scores 0
    event_types = EVENT_TYPES + [k for k in settings.base_points if k not in EVENT_TYPES]
    click.echo("Base points:")
    print_table(
        [
            {"event": EVENT_TYPE_LABELS.get(k, k), "type": k, "points": settings.base_points.get(k, 0)}
            for k in event_types
        ],
        ["event", "type", "points"],
    )

    coeff = settings.money_coefficients
    dim = settings.diminishing_returns
    click.echo(f"Money: mode={settings.money_mode} merch_coeff={coeff.merch_coeff} donation_coeff={coeff.donation_coeff}")
    if dim.enabled:
        click.echo(f"Diminishing returns: rate={dim.rate} applies_to={', '.join(dim.applies_to) or '-'}")
    else:
        click.echo("Diminishing returns: disabled")

    rows = [
        {
            "from": AREA_LABELS.get(src, src),
            "to": AREA_LABELS.get(dst, dst),
            "multiplier": m,
        }
        for (src, dst), m in table.items()
        if all_pairs or m != NEUTRAL_MULTIPLIER
    ]
    click.echo("Travel multipliers:")
    print_table(rows, ["from", "to", "multiplier"])
