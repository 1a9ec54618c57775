# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    # Retryable kinds surface as 503 so callers know a fresh round may succeed.
    FEATURE_CONSENSUS_NOT_FOUND = ErrorInfo(
        "Feature consensus not found", status.HTTP_503_SERVICE_UNAVAILABLE
    )
    POSITION_CONSENSUS_NOT_FOUND = ErrorInfo(
        "Position consensus not found", status.HTTP_503_SERVICE_UNAVAILABLE
    )
    INFERENCE_ERROR = ErrorInfo(
        "Tamper inference failed", status.HTTP_503_SERVICE_UNAVAILABLE
    )
    MISSING_SOURCE = ErrorInfo(
        "Missing source evidence", status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    PACKET_VALIDATION_FAILED = ErrorInfo(
        "Packet validation failed", status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    INVALID_RENDITION_PATH = ErrorInfo(
        "Rendition path outside the rendition directory",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    INTERNAL_ERROR = ErrorInfo("Internal Error", status.HTTP_502_BAD_GATEWAY)

    @classmethod
    def for_kind(cls, kind: str) -> "ErrorMessage":
        return cls.__members__.get(kind.upper(), cls.INTERNAL_ERROR)
