# service/verification_service.py
from typing import List, Optional
from config.settings import settings
from core.entities import Evidence, VerifyConfig
from core.profiles import lookup_profile
from core.tamper_classifier import TamperClassifier
from core.verification_pipeline import verify
from model.api import EvidenceIn, VerifyRequest, VerifyResponse
from util.enums import ErrorMessage
from util.errors import AppError, ClassifiedError
from util.functions import resolve_under
import logging

logger = logging.getLogger(__name__)


def to_evidence(item: EvidenceIn, rendition_dir: str) -> Evidence:
    """
    Build core evidence from a request item.
    The rendition path is resolved under `rendition_dir`; escaping it raises AppError.
    """
    try:
        rendition_path = resolve_under(rendition_dir, item.renditionPath)
    except ValueError:
        info = ErrorMessage.INVALID_RENDITION_PATH.value
        logger.warning("verify.rejected_path path=%s", item.renditionPath)
        raise AppError(f"{info.message}: {item.renditionPath}", info.http_status)
    return Evidence(
        source_path=item.sourcePath,
        rendition_path=rendition_path,
        positions=item.positions,
        lengths=item.lengths,
        features=item.features,
        profile=lookup_profile(item.profile),
    )


class VerificationService:
    """
    Runs one verification round per request and maps classified errors onto HTTP.
    """

    def __init__(
        self,
        classifier: Optional[TamperClassifier] = None,
        rendition_dir: Optional[str] = None,
    ) -> None:
        self._classifier = classifier or TamperClassifier.from_settings()
        self._rendition_dir = rendition_dir or settings.RENDITION_DIR

    async def verify(self, req: VerifyRequest) -> VerifyResponse:
        evidences: List[Evidence] = [
            to_evidence(e, self._rendition_dir) for e in req.evidences
        ]
        config = VerifyConfig.from_settings(
            feature_check=req.checks.featureCheck,
            position_check=req.checks.positionCheck,
            inference_check=req.checks.inferenceCheck,
            packet_check=req.checks.packetCheck,
        )
        logger.info(
            "verify.start n=%d feature=%s position=%s inference=%s packet=%s",
            len(evidences),
            config.feature_check,
            config.position_check,
            config.inference_check,
            config.packet_check,
        )

        try:
            result = await verify(evidences, config, classifier=self._classifier)
        except ClassifiedError as e:
            info = ErrorMessage.for_kind(e.kind).value
            logger.warning(
                "verify.failed kind=%s retryable=%s err=%s", e.kind, e.retryable, e
            )
            raise AppError(f"{info.message} ({e.kind})", info.http_status)

        # Answer in the caller's terms, not the server's resolved path
        winner = req.evidences[result.survivors[0]].renditionPath if result.found else ""
        return VerifyResponse(
            ok=result.found, winner=winner, survivors=list(result.survivors)
        )
