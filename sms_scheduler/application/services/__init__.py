from .delete_message_service import DeleteMessageService
from .dispatch_message_service import DispatchMessageService
from .query_message_services import GetMessageService, ListMessagesService
from .reconcile_delivery_status_service import ReconcileDeliveryStatusService
from .schedule_message_service import ScheduleMessageService
from .update_message_service import UpdateMessageService

__all__ = [
    "DeleteMessageService",
    "DispatchMessageService",
    "GetMessageService",
    "ListMessagesService",
    "ReconcileDeliveryStatusService",
    "ScheduleMessageService",
    "UpdateMessageService",
]
