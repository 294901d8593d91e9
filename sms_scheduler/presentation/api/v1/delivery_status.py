from fastapi import APIRouter, Depends, Form

from ....application.dtos import DeliveryStatusCallbackDTO, ReconciliationResultDTO
from ....application.services import ReconcileDeliveryStatusService
from ..dependencies import get_reconcile_service

router = APIRouter(tags=["delivery-status"])


@router.post(
    "/message-status",
    response_model=ReconciliationResultDTO,
    summary="Provider delivery-status callback",
    description=(
        "Receives Twilio-style status callbacks (form-encoded). Answers 200 even "
        "when no stored message matches."
    ),
)
async def message_status_callback(
    MessageStatus: str = Form(...),
    MessageSid: str | None = Form(None),
    To: str | None = Form(None),
    service: ReconcileDeliveryStatusService = Depends(get_reconcile_service),
) -> ReconciliationResultDTO:
    dto = DeliveryStatusCallbackDTO(status=MessageStatus, provider_ref=MessageSid, recipient=To)
    return await service.execute(dto)
