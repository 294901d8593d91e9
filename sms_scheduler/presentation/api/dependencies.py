from fastapi import Depends, Request

from ...application.ports.outbound import MessageRepository
from ...application.services import (
    DeleteMessageService,
    GetMessageService,
    ListMessagesService,
    ReconcileDeliveryStatusService,
    ScheduleMessageService,
    UpdateMessageService,
)
from ...bootstrap import Container


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_repository(container: Container = Depends(get_container)) -> MessageRepository:
    return container.repository


def get_schedule_service(container: Container = Depends(get_container)) -> ScheduleMessageService:
    return ScheduleMessageService(container.repository, clock=container.clock)


def get_list_service(
    repository: MessageRepository = Depends(get_repository),
) -> ListMessagesService:
    return ListMessagesService(repository)


def get_message_service(
    repository: MessageRepository = Depends(get_repository),
) -> GetMessageService:
    return GetMessageService(repository)


def get_update_service(container: Container = Depends(get_container)) -> UpdateMessageService:
    return UpdateMessageService(container.repository, clock=container.clock)


def get_delete_service(
    repository: MessageRepository = Depends(get_repository),
) -> DeleteMessageService:
    return DeleteMessageService(repository)


def get_reconcile_service(
    container: Container = Depends(get_container),
) -> ReconcileDeliveryStatusService:
    return ReconcileDeliveryStatusService(
        container.repository,
        recipient_fallback=container.settings.callback_recipient_fallback,
    )
