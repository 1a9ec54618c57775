# core/entities.py
from dataclasses import dataclass, field
from typing import List, Tuple

from core.profiles import VideoProfile


@dataclass(frozen=True)
class Evidence:
    """
    Testable facts about one candidate rendition.
    `positions` and `lengths` are parallel: segment i starts at positions[i]
    and spans lengths[i] bytes of the rendition file.
    """

    source_path: str
    rendition_path: str
    positions: Tuple[float, ...]
    lengths: Tuple[int, ...]
    features: Tuple[float, ...]
    profile: VideoProfile

    def __post_init__(self) -> None:
        # Normalise lists to tuples so the record stays immutable
        for name in ("positions", "lengths", "features"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        if len(self.positions) != len(self.lengths):
            raise ValueError(
                f"positions/lengths mismatch: {len(self.positions)} != {len(self.lengths)}"
            )


@dataclass(frozen=True)
class TamperVerdict:
    tamper: int  # 1 if the classifier flagged the rendition, else 0
    video_available: bool = False
    audio_available: bool = False
    audio_distance: float = 0.0
    pixels: int = 0
    # Orders several tamper-flagged results; the highest distance is the most preferable
    ocsvm_distance: float = 0.0


@dataclass
class TamperResults:
    source: str
    verdicts: List[TamperVerdict] = field(default_factory=list)

    @property
    def tamper(self) -> List[int]:
        return [v.tamper for v in self.verdicts]


@dataclass(frozen=True)
class VerificationResult:
    winner: str = ""  # rendition path; empty when no candidate survived
    survivors: Tuple[int, ...] = ()

    @property
    def found(self) -> bool:
        return bool(self.winner)


@dataclass(frozen=True)
class VerifyConfig:
    feature_check: bool = True
    position_check: bool = True
    inference_check: bool = False
    packet_check: bool = True
    feature_epsilon: float = 0.00001
    position_epsilon: float = 0.0015
    min_points: int = 2

    @classmethod
    def from_settings(cls, **overrides) -> "VerifyConfig":
        from config.settings import settings

        base = dict(
            feature_check=settings.FEATURE_CHECK,
            position_check=settings.POSITION_CHECK,
            inference_check=settings.INFERENCE_CHECK,
            packet_check=settings.PACKET_CHECK,
            feature_epsilon=settings.FEATURE_EPSILON,
            position_epsilon=settings.POSITION_EPSILON,
            min_points=settings.CLUSTER_MIN_POINTS,
        )
        base.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**base)
