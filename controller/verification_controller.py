# controller/verification_controller.py
from fastapi import APIRouter, Depends, status
from model.api import VerifyRequest, VerifyResponse
from service.verification_service import VerificationService
from controller.controller_dependencies import get_verification_service
from util.constants import InternalURIs

verification_router = APIRouter()


@verification_router.post(
    InternalURIs.VERIFY,
    response_model=VerifyResponse,
    status_code=status.HTTP_200_OK,
)
async def verify_renditions(
    payload: VerifyRequest,
    service: VerificationService = Depends(get_verification_service),
) -> VerifyResponse:
    return await service.verify(payload)
