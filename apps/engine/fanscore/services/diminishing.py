from typing import Dict

from fanscore.schemas import DiminishingReturnsConfig


class DiminishingReturnsTracker:
    """
    同一種別イベントの繰り返し参加に対する逓減係数
    n回目の参加で rate^(n-1)。回数はこのバッチ内の出現順のみで数える
    （月次集計なら月初から、累計なら全期間からやり直し）。
    """

    def __init__(self, config: DiminishingReturnsConfig):
        self.config = config
        self._applies_to = frozenset(config.applies_to)
        self._counts: Dict[str, int] = {}

    def reset(self) -> None:
        self._counts = {}

    def occurrences(self, event_type: str) -> int:
        return self._counts.get(event_type, 0)

    def observe(self, event_type: str) -> float:
        # Counted for every type, whether or not decay applies to it.
        n = self._counts.get(event_type, 0) + 1
        self._counts[event_type] = n

        if self.config.enabled and event_type in self._applies_to:
            return self.config.rate ** (n - 1)
        return 1.0
