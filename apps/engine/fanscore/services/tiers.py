from typing import List, Optional, Sequence

from fanscore.schemas import TierDefinition, TierStatus


def sort_tiers_descending(tiers: Sequence[TierDefinition]) -> List[TierDefinition]:
    return sorted(tiers, key=lambda t: t.min_score, reverse=True)


def determine_tier(
    score: float,
    tiers: Sequence[TierDefinition],
    presorted: bool = False,
) -> Optional[TierDefinition]:
    """
    累計スコアから所属ティアを決定する。
    min_score 以上を満たすティアのうち最も min_score が高いもの（境界は含む）。
    presorted=True の場合、tiers は sort_tiers_descending 済みとみなす。
    """
    ordered = tiers if presorted else sort_tiers_descending(tiers)
    return next((t for t in ordered if score >= t.min_score), None)


def get_next_tier(
    current_tier: Optional[TierDefinition],
    tiers: Sequence[TierDefinition],
) -> Optional[TierDefinition]:
    """
    次に目指すティア（1つ上）を返す。最上位なら None。
    """
    if not tiers:
        return None

    if current_tier is None:
        # Entry tier: lowest threshold, higher-ranked tier on equal thresholds
        return min(tiers, key=lambda t: (t.min_score, t.sort_order))

    # sort_order ascending: 1 = top tier
    ordered = sorted(tiers, key=lambda t: t.sort_order)
    idx = next((i for i, t in enumerate(ordered) if t.id == current_tier.id), -1)
    return ordered[idx - 1] if idx > 0 else None


def calculate_tier_progress(
    score: float,
    current_tier: Optional[TierDefinition],
    next_tier: Optional[TierDefinition],
) -> float:
    """次ティアまでの進捗率（0〜100）"""
    if next_tier is None:
        return 100.0
    if current_tier is None:
        return 0.0

    span = next_tier.min_score - current_tier.min_score
    if span <= 0:
        # Misconfigured thresholds
        return 100.0

    progress = (score - current_tier.min_score) / span * 100
    return min(max(progress, 0.0), 100.0)


class TierClassifier:
    """Sorts the tier list once for classifying a whole batch of fans."""

    def __init__(self, tiers: Sequence[TierDefinition]):
        self.tiers = list(tiers)
        self._descending = sort_tiers_descending(self.tiers)

    def determine(self, score: float) -> Optional[TierDefinition]:
        return determine_tier(score, self._descending, presorted=True)

    def classify(self, score: float) -> TierStatus:
        current = self.determine(score)
        nxt = get_next_tier(current, self.tiers)
        return TierStatus(
            current_tier=current,
            next_tier=nxt,
            progress=calculate_tier_progress(score, current, nxt),
        )
