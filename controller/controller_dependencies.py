# controller/controller_dependencies.py
from core.tamper_classifier import TamperClassifier
from service.verification_service import VerificationService


def get_verification_service() -> VerificationService:
    _classifier = TamperClassifier.from_settings()
    _service = VerificationService(_classifier)
    return _service
