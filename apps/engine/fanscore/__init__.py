"""Fan contribution scoring engine."""
from fanscore.services.distance import resolve_distance_multiplier
from fanscore.services.ranking import assign_ranks
from fanscore.services.scoring import calculate
from fanscore.services.tiers import calculate_tier_progress, determine_tier, get_next_tier

__all__ = [
    "assign_ranks",
    "calculate",
    "calculate_tier_progress",
    "determine_tier",
    "get_next_tier",
    "resolve_distance_multiplier",
]
