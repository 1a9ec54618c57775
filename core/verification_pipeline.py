# core/verification_pipeline.py
from typing import Callable, List, Optional, Sequence
from core.consensus import canonical_group, cluster, intersect
from core.distance import IndexedPoint
from core.entities import Evidence, VerificationResult, VerifyConfig
from core.packet_validator import validate_evidence
from core.tamper_classifier import TamperClassifier
from util.errors import (
    FatalError,
    FeatureConsensusNotFound,
    InferenceError,
    MissingSourceError,
    PacketValidationFailed,
    PositionConsensusNotFound,
    RetryableError,
)
import logging
from util.timing import timed

logger = logging.getLogger(__name__)

PacketCheck = Callable[[Evidence], bool]


def _axes(evidences: Sequence[Evidence]) -> tuple[List[IndexedPoint], List[IndexedPoint]]:
    """Feature and position points, one per evidence, with 1-based ids."""
    features = [IndexedPoint.of(i + 1, e.features) for i, e in enumerate(evidences)]
    positions = [IndexedPoint.of(i + 1, e.positions) for i, e in enumerate(evidences)]
    return features, positions


def _first_valid(
    evidences: Sequence[Evidence], ids: Sequence[int], check: PacketCheck
) -> Optional[int]:
    for i in ids:
        if check(evidences[i]):
            return i
        logger.info("verify.packet.reject id=%d path=%s", i, evidences[i].rendition_path)
    return None


async def verify(
    evidences: Sequence[Evidence],
    config: Optional[VerifyConfig] = None,
    classifier: Optional[TamperClassifier] = None,
    packet_check: PacketCheck = validate_evidence,
) -> VerificationResult:
    """
    Pick the trusted rendition among `evidences`:
    1) cluster feature vectors (cosine) and positions (squared-Euclidean)
    2) intersect the canonical groups of the enabled axes
    3) drop candidates the tamper classifier flags
    4) keep the first candidate whose transport stream validates
    Returns the winner (or an empty winner when nothing survived).
    Raises RetryableError / FatalError wrapping the failing stage's error kind.
    """
    cfg = config or VerifyConfig()
    if not evidences:
        raise FatalError(MissingSourceError("no evidence supplied"))

    with timed(logger, "verify.pipeline", n=len(evidences)):
        feature_points, position_points = _axes(evidences)

        groups = []
        if cfg.feature_check:
            with timed(logger, "verify.feature"):
                group = canonical_group(
                    cluster(cfg.min_points, cfg.feature_epsilon, False, feature_points)
                )
            if not group:
                raise RetryableError(FeatureConsensusNotFound())
            logger.info("verify.feature.group size=%d", len(group))
            groups.append(group)

        if cfg.position_check:
            with timed(logger, "verify.position"):
                group = canonical_group(
                    cluster(cfg.min_points, cfg.position_epsilon, True, position_points)
                )
            if not group:
                raise RetryableError(PositionConsensusNotFound())
            logger.info("verify.position.group size=%d", len(group))
            groups.append(group)

        ids = intersect(len(evidences), *groups)
        logger.info("verify.intersect axes=%d ids=%s", len(groups), ids)

        if cfg.inference_check:
            if classifier is None or not evidences[0].source_path:
                raise FatalError(MissingSourceError("inference needs a source and a classifier"))
            try:
                results = await classifier.infer(evidences)
            except Exception as e:
                logger.error("verify.inference.error err=%s", type(e).__name__)
                raise RetryableError(InferenceError(f"ErrorInference: {e}")) from e
            tamper = results.tamper
            ids = [i for i in ids if tamper[i] == 0]
            logger.info("verify.inference ids=%s", ids)

        if cfg.packet_check and ids:
            with timed(logger, "verify.packet", candidates=len(ids)):
                passed = _first_valid(evidences, ids, packet_check)
            if passed is None:
                raise FatalError(PacketValidationFailed())
            ids = [passed]

    winner = evidences[ids[0]].rendition_path if ids else ""
    logger.info("verify.result winner=%s survivors=%s", winner or "-", ids)
    return VerificationResult(winner=winner, survivors=tuple(ids))
