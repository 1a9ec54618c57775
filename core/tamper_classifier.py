# core/tamper_classifier.py
from typing import Optional, Sequence
import httpx
from pydantic import ValidationError
from config.settings import settings
from core.entities import Evidence, TamperResults, TamperVerdict
from model.classifier import (
    ClassifierRendition,
    ClassifierResolution,
    TamperRequest,
    TamperResponse,
)
from util.errors import ClassifierResponseError, MissingSourceError, VerifierStatusError
from util.timing import timed
import logging

logger = logging.getLogger(__name__)


def build_request(evidences: Sequence[Evidence], orchestrator_id: str) -> TamperRequest:
    """
    Describe every candidate rendition for the classifier.
    The first evidence's source path stands for the shared source.
    """
    if not evidences:
        raise MissingSourceError("no renditions to classify")
    renditions = []
    for ev in evidences:
        w, h = ev.profile.dimensions()
        renditions.append(
            ClassifierRendition(
                uri=ev.rendition_path,
                resolution=ClassifierResolution(width=w, height=h),
                frame_rate=ev.profile.framerate,
                pixels=ev.profile.pixels,
                features=list(ev.features),
            )
        )
    return TamperRequest(
        source=evidences[0].source_path,
        renditions=renditions,
        orchestratorID=orchestrator_id,
    )


def to_results(resp: TamperResponse) -> TamperResults:
    return TamperResults(
        source=resp.source,
        verdicts=[
            TamperVerdict(
                tamper=1 if r.tamper > 0 else 0,
                video_available=r.video_available,
                audio_available=r.audio_available,
                audio_distance=r.audio_dist,
                pixels=r.pixels,
                ocsvm_distance=r.ocsvm_dist,
            )
            for r in resp.results
        ],
    )


class TamperClassifier:
    """
    Client for the external tamper scoring service.
    The endpoint is passed in; nothing here reads process-wide state.
    """

    def __init__(
        self,
        url: str,
        orchestrator_id: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url
        self._orchestrator_id = orchestrator_id
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    @classmethod
    def from_settings(
        cls, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "TamperClassifier":
        return cls(
            url=settings.CLASSIFIER_URL,
            orchestrator_id=settings.ORCHESTRATOR_ID,
            timeout=settings.CLASSIFIER_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def infer(self, evidences: Sequence[Evidence]) -> TamperResults:
        """
        POST all renditions and return one verdict per rendition, in submission order.
        - transport failures (httpx.RequestError, timeouts) propagate unchanged
        - status >= 400 raises VerifierStatusError
        - an unusable body raises ClassifierResponseError
        """
        req = build_request(evidences, self._orchestrator_id)
        payload = req.model_dump(mode="json")

        with timed(logger, "classifier.infer", n=len(req.renditions)):
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                try:
                    resp = await client.post(self._url, json=payload)
                except httpx.RequestError as e:
                    logger.error("classifier.request_error err=%s", type(e).__name__)
                    raise

        if resp.status_code >= 400:
            logger.error("classifier.bad_status status=%d", resp.status_code)
            raise VerifierStatusError(resp.status_code)

        try:
            parsed = TamperResponse.model_validate_json(resp.content)
        except ValidationError as e:
            logger.error("classifier.decode_error errors=%d", e.error_count())
            raise ClassifierResponseError(f"malformed classifier response: {e}") from e

        if len(parsed.results) != len(req.renditions):
            raise ClassifierResponseError(
                f"expected {len(req.renditions)} results, got {len(parsed.results)}"
            )

        results = to_results(parsed)
        logger.info(
            "classifier.result n=%d tampered=%d", len(results.verdicts), sum(results.tamper)
        )
        return results
