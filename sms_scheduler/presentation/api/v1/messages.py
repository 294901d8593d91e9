from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from ....application.dtos import (
    MessageListResponseDTO,
    MessageResponseDTO,
    ScheduleMessageDTO,
    UpdateMessageDTO,
)
from ....application.services import (
    DeleteMessageService,
    GetMessageService,
    ListMessagesService,
    ScheduleMessageService,
    UpdateMessageService,
)
from ..dependencies import (
    get_delete_service,
    get_list_service,
    get_message_service,
    get_schedule_service,
    get_update_service,
)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post(
    "",
    response_model=MessageResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule a message",
    description="Schedule an SMS for delivery at a future time.",
)
async def schedule_message(
    request: ScheduleMessageDTO,
    service: ScheduleMessageService = Depends(get_schedule_service),
) -> MessageResponseDTO:
    return await service.execute(request)


@router.get(
    "",
    response_model=MessageListResponseDTO,
    summary="List messages",
    description="All messages, latest scheduled time first.",
)
async def list_messages(
    service: ListMessagesService = Depends(get_list_service),
) -> MessageListResponseDTO:
    return await service.execute()


@router.get(
    "/{message_id}",
    response_model=MessageResponseDTO,
    summary="Get message details",
)
async def get_message(
    message_id: UUID,
    service: GetMessageService = Depends(get_message_service),
) -> MessageResponseDTO:
    return await service.execute(message_id)


@router.put(
    "/{message_id}",
    response_model=MessageResponseDTO,
    summary="Edit a pending message",
    description="Replace recipient, body and scheduled time. Only pending messages can be edited.",
)
async def update_message(
    message_id: UUID,
    request: UpdateMessageDTO,
    service: UpdateMessageService = Depends(get_update_service),
) -> MessageResponseDTO:
    return await service.execute(message_id, request)


@router.delete(
    "/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a message",
)
async def delete_message(
    message_id: UUID,
    service: DeleteMessageService = Depends(get_delete_service),
) -> Response:
    await service.execute(message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
