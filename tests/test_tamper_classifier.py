"""
Tests for the tamper classifier client against a mocked HTTP transport.
"""

import asyncio
import json

import httpx
import pytest

from core.entities import Evidence
from core.profiles import lookup_profile
from core.tamper_classifier import TamperClassifier, build_request
from util.errors import ClassifierResponseError, MissingSourceError, VerifierStatusError

URL = "http://classifier.test/verify"


def make_evidence(i: int, profile: str = "P720p30fps16x9") -> Evidence:
    return Evidence(
        source_path="source.ts",
        rendition_path=f"rendition_{i}.ts",
        positions=[0, 188],
        lengths=[188, 376],
        features=[float(i), 1.0],
        profile=lookup_profile(profile),
    )


def result(tamper: int, **extra) -> dict:
    out = {
        "video_available": True,
        "audio_available": True,
        "audio_dist": 0.0,
        "pixels": 921600,
        "tamper": tamper,
        "ocsvm_dist": 0.5,
    }
    out.update(extra)
    return out


def client_for(handler) -> TamperClassifier:
    return TamperClassifier(
        URL, "orch-1", timeout=5.0, transport=httpx.MockTransport(handler)
    )


def run(coro):
    return asyncio.run(coro)


# =============================================================================
# REQUEST
# =============================================================================

def test_request_describes_every_rendition():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"source": "source.ts", "results": [result(0), result(0)]})

    evs = [make_evidence(0), make_evidence(1, "P360p25fps16x9")]
    run(client_for(handler).infer(evs))

    assert seen["method"] == "POST"
    assert seen["url"] == URL
    body = seen["body"]
    assert body["source"] == "source.ts"
    assert body["orchestratorID"] == "orch-1"
    assert len(body["renditions"]) == 2
    first, second = body["renditions"]
    assert first["uri"] == "rendition_0.ts"
    assert first["resolution"] == {"width": 1280, "height": 720}
    assert first["frame_rate"] == 30
    assert first["pixels"] == 1280 * 720
    assert first["features"] == [0.0, 1.0]
    assert second["resolution"] == {"width": 640, "height": 360}
    assert second["frame_rate"] == 25


def test_empty_evidence_is_missing_source():
    with pytest.raises(MissingSourceError):
        build_request([], "orch-1")


# =============================================================================
# RESPONSE MAPPING
# =============================================================================

def test_verdicts_map_in_submission_order():
    def handler(request):
        return httpx.Response(
            200,
            json={
                "source": "source.ts",
                "results": [result(1, ocsvm_dist=0.9), result(0), result(2, pixels=7)],
            },
        )

    evs = [make_evidence(i) for i in range(3)]
    out = run(client_for(handler).infer(evs))
    assert out.tamper == [1, 0, 1]
    assert out.source == "source.ts"
    assert out.verdicts[0].ocsvm_distance == pytest.approx(0.9)
    assert out.verdicts[2].pixels == 7


def test_missing_auxiliary_fields_default():
    def handler(request):
        return httpx.Response(200, json={"results": [{"tamper": 0}]})

    out = run(client_for(handler).infer([make_evidence(0)]))
    v = out.verdicts[0]
    assert v.tamper == 0
    assert v.video_available is False
    assert v.audio_distance == 0.0


# =============================================================================
# FAILURES
# =============================================================================

@pytest.mark.parametrize("code", [400, 404, 500, 503])
def test_error_status_raises_verifier_status(code):
    def handler(request):
        return httpx.Response(code, json={"error": "nope"})

    with pytest.raises(VerifierStatusError) as exc:
        run(client_for(handler).infer([make_evidence(0)]))
    assert exc.value.status_code == code
    assert exc.value.kind == "verifier_status"


def test_malformed_body_raises_response_error():
    def handler(request):
        return httpx.Response(200, content=b"<html>not json</html>")

    with pytest.raises(ClassifierResponseError):
        run(client_for(handler).infer([make_evidence(0)]))


def test_wrong_field_type_raises_response_error():
    def handler(request):
        return httpx.Response(200, json={"results": [{"tamper": "maybe"}]})

    with pytest.raises(ClassifierResponseError):
        run(client_for(handler).infer([make_evidence(0)]))


def test_result_count_mismatch_raises_response_error():
    def handler(request):
        return httpx.Response(200, json={"results": [result(0)]})

    with pytest.raises(ClassifierResponseError):
        run(client_for(handler).infer([make_evidence(0), make_evidence(1)]))


def test_transport_failure_propagates_unchanged():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        run(client_for(handler).infer([make_evidence(0)]))


def test_client_built_from_settings(monkeypatch):
    from config.settings import settings

    monkeypatch.setattr(settings, "CLASSIFIER_URL", "http://elsewhere:9000/verify")
    monkeypatch.setattr(settings, "ORCHESTRATOR_ID", "orch-from-env")
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"results": [result(0)]})

    clf = TamperClassifier.from_settings(transport=httpx.MockTransport(handler))
    run(clf.infer([make_evidence(0)]))
    assert seen["url"] == "http://elsewhere:9000/verify"
    assert seen["body"]["orchestratorID"] == "orch-from-env"
