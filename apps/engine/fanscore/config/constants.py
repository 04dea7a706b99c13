"""
スコア計算の係数・エリア定義一覧
このファイルに既定値を集約し、運用中の調整を容易にする。
"""
import enum
from typing import Dict, List, Tuple

# =============================================================================
# エリア
# =============================================================================


class Area(str, enum.Enum):
    KOBE = "KOBE"
    OSAKA = "OSAKA"
    NARA = "NARA"
    TOKYO = "TOKYO"
    MITO = "MITO"
    SHIKOKU = "SHIKOKU"
    OTHER = "OTHER"
    ONLINE = "ONLINE"


ONLINE = Area.ONLINE.value

AREAS = [a.value for a in Area]

AREA_LABELS: Dict[str, str] = {
    "KOBE": "神戸",
    "OSAKA": "大阪",
    "NARA": "奈良",
    "TOKYO": "東京",
    "MITO": "水戸",
    "SHIKOKU": "四国",
    "OTHER": "その他",
    ONLINE: "オンライン",
}

# 居住エリアとして有効なもの（オンラインは居住地にならない）
PHYSICAL_AREAS = [a for a in AREAS if a != ONLINE]

# =============================================================================
# イベント種別
# =============================================================================


class EventType(str, enum.Enum):
    PAID_LIVE = "PaidLive"
    FREE_LIVE = "FreeLive"
    PAID_STREAM = "PaidStream"
    YOUTUBE = "YouTube"


PAID_LIVE = EventType.PAID_LIVE.value
FREE_LIVE = EventType.FREE_LIVE.value
PAID_STREAM = EventType.PAID_STREAM.value
YOUTUBE = EventType.YOUTUBE.value

EVENT_TYPES = [t.value for t in EventType]

EVENT_TYPE_LABELS: Dict[str, str] = {
    PAID_LIVE: "有料ライブ",
    FREE_LIVE: "フリーライブ",
    PAID_STREAM: "有料配信",
    YOUTUBE: "YouTube",
}

# =============================================================================
# スコア設定（既定値）
# =============================================================================

MONEY_MODE_LINEAR = "linear"
MONEY_MODE_SQRT = "sqrt"
MONEY_MODE_LOG = "log"

MONEY_MODES = [MONEY_MODE_LINEAR, MONEY_MODE_SQRT, MONEY_MODE_LOG]

DEFAULT_BASE_POINTS: Dict[str, float] = {
    PAID_LIVE: 10,
    FREE_LIVE: 5,
    PAID_STREAM: 3,
    YOUTUBE: 1,
}

# 旧形式（pointsBase）のキー -> イベント種別
LEGACY_BASE_POINT_KEYS: Dict[str, str] = {
    "paidLiveBase": PAID_LIVE,
    "freeLiveBase": FREE_LIVE,
    "paidStreamBase": PAID_STREAM,
    "youtubeViewBase": YOUTUBE,
}

DEFAULT_MERCH_COEFF = 0.01  # 物販 1円あたり（変換後）
DEFAULT_DONATION_COEFF = 0.02  # スパチャ等 1円あたり（変換後）
DEFAULT_MONEY_MODE = MONEY_MODE_SQRT

DEFAULT_DIMINISHING_ENABLED = True
DEFAULT_DIMINISHING_RATE = 0.9
DEFAULT_DIMINISHING_APPLIES_TO = [PAID_LIVE, FREE_LIVE, PAID_STREAM]

# =============================================================================
# 遠征係数（居住エリア -> 会場エリア）
# =============================================================================

NEUTRAL_MULTIPLIER = 1.0

# 双方向で同じ値を持つ組み合わせ
_REGIONAL_PAIRS: List[Tuple[str, str, float]] = [
    ("KOBE", "OSAKA", 1.2),
    ("KOBE", "NARA", 1.2),
    ("KOBE", "SHIKOKU", 1.35),
    ("KOBE", "TOKYO", 1.6),
    ("KOBE", "MITO", 1.7),
    ("KOBE", "OTHER", 1.3),
    ("OSAKA", "NARA", 1.1),
    ("OSAKA", "SHIKOKU", 1.25),
    ("OSAKA", "TOKYO", 1.5),
    ("OSAKA", "MITO", 1.6),
    ("OSAKA", "OTHER", 1.25),
    ("NARA", "SHIKOKU", 1.3),
    ("NARA", "TOKYO", 1.5),
    ("NARA", "MITO", 1.6),
    ("NARA", "OTHER", 1.25),
    ("TOKYO", "SHIKOKU", 1.5),
    ("TOKYO", "MITO", 1.15),
    ("TOKYO", "OTHER", 1.2),
    ("MITO", "SHIKOKU", 1.6),
    ("MITO", "OTHER", 1.3),
    ("SHIKOKU", "OTHER", 1.3),
]

DEFAULT_AREA_MULTIPLIERS: List[Tuple[str, str, float]] = (
    [(a, a, NEUTRAL_MULTIPLIER) for a in PHYSICAL_AREAS]
    + [(a, ONLINE, NEUTRAL_MULTIPLIER) for a in AREAS]
    + [(ONLINE, a, NEUTRAL_MULTIPLIER) for a in PHYSICAL_AREAS]
    + [pair for src, dst, m in _REGIONAL_PAIRS for pair in ((src, dst, m), (dst, src, m))]
)

# =============================================================================
# レポート
# =============================================================================

DEFAULT_HISTORY_MONTHS = 12
DEFAULT_RECENT_LOG_LIMIT = 20

RANKING_MODE_MONTHLY = "monthly"
RANKING_MODE_CUMULATIVE = "cumulative"

RANKING_MODES = [RANKING_MODE_MONTHLY, RANKING_MODE_CUMULATIVE]
