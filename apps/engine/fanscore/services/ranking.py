from typing import List, Sequence

from fanscore.schemas import FanScoreResult, RankedResult


def sort_by_total_score(results: Sequence[FanScoreResult]) -> List[FanScoreResult]:
    # Stable: exact ties keep the fan order produced by the calculator
    return sorted(results, key=lambda r: r.total_score, reverse=True)


def assign_ranks(sorted_results: Sequence[FanScoreResult]) -> List[RankedResult]:
    """
    順位付け（同点は同順位、次の順位は位置で飛ばす: 1,1,1,4）
    入力は total_score 降順であること。
    """
    ranked: List[RankedResult] = []
    rank = 1
    for idx, result in enumerate(sorted_results):
        if idx > 0 and result.total_score != sorted_results[idx - 1].total_score:
            rank = idx + 1
        ranked.append(RankedResult.model_validate({**dict(result), "rank": rank}))
    return ranked


def rank_results(results: Sequence[FanScoreResult]) -> List[RankedResult]:
    return assign_ranks(sort_by_total_score(results))
