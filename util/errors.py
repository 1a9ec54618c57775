# util/errors.py
from fastapi import HTTPException, status


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)


# ---------------- Verification error kinds ----------------


class VerificationError(Exception):
    """Base for every error kind the verification pipeline can produce."""

    kind: str = "verification_error"
    default_message: str = "verification failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class MissingSourceError(VerificationError):
    kind = "missing_source"
    default_message = "MissingSource"


class FeatureConsensusNotFound(VerificationError):
    kind = "feature_consensus_not_found"
    default_message = "no consensus group on the feature axis"


class PositionConsensusNotFound(VerificationError):
    kind = "position_consensus_not_found"
    default_message = "no consensus group on the position axis"


class VerifierStatusError(VerificationError):
    """The classifier answered, but with an error status."""

    kind = "verifier_status"

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"VerifierStatus {status_code}")


class ClassifierResponseError(VerificationError):
    """The classifier answered 2xx with a body we cannot use."""

    kind = "classifier_response"
    default_message = "malformed classifier response"


class InferenceError(VerificationError):
    kind = "inference_error"
    default_message = "ErrorInference"


class PacketValidationFailed(VerificationError):
    kind = "packet_validation_failed"
    default_message = "no candidate passed packet validation"


# ---------------- Retry classification ----------------


class ClassifiedError(Exception):
    """
    Wraps a VerificationError with a retry decision.
    Callers inspect `retryable` (or the subclass) before re-running a round.
    """

    retryable: bool = False

    def __init__(self, cause: VerificationError) -> None:
        super().__init__(str(cause))
        self.cause = cause

    @property
    def kind(self) -> str:
        return self.cause.kind

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self.cause).__name__}: {self.cause})"


class RetryableError(ClassifiedError):
    retryable = True


class FatalError(ClassifiedError):
    retryable = False
