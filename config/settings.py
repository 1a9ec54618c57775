# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")

    # Tamper classifier
    CLASSIFIER_URL: str = Field(
        default="http://127.0.0.1:5000/verify", validation_alias="CLASSIFIER_URL"
    )
    CLASSIFIER_TIMEOUT_SECONDS: float = Field(
        default=30.0, validation_alias="CLASSIFIER_TIMEOUT_SECONDS"
    )
    ORCHESTRATOR_ID: str = Field(default="orchestrator", validation_alias="ORCHESTRATOR_ID")

    # Rendition paths from requests are resolved under this directory
    RENDITION_DIR: str = Field(default="renditions", validation_alias="RENDITION_DIR")

    # Pipeline stages enabled when a request does not say otherwise
    FEATURE_CHECK: bool = Field(default=True, validation_alias="FEATURE_CHECK")
    POSITION_CHECK: bool = Field(default=True, validation_alias="POSITION_CHECK")
    INFERENCE_CHECK: bool = Field(default=False, validation_alias="INFERENCE_CHECK")
    PACKET_CHECK: bool = Field(default=True, validation_alias="PACKET_CHECK")

    # Clustering
    FEATURE_EPSILON: float = Field(default=0.00001, validation_alias="FEATURE_EPSILON")
    POSITION_EPSILON: float = Field(default=0.0015, validation_alias="POSITION_EPSILON")
    CLUSTER_MIN_POINTS: int = Field(default=2, validation_alias="CLUSTER_MIN_POINTS")

    # Logging knobs
    LOGGER_NAME: str = "rendition-verifier"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="verifier.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
