from unittest.mock import AsyncMock

import pytest

from sms_scheduler.application.dtos import DeliveryStatusCallbackDTO
from sms_scheduler.application.services import ReconcileDeliveryStatusService
from sms_scheduler.domain.exceptions import ValidationError


class TestReconcileDeliveryStatusService:
    @pytest.fixture
    def mock_repository(self):
        repository = AsyncMock()
        repository.apply_provider_status.return_value = 1
        return repository

    @pytest.mark.asyncio
    async def test_correlates_by_provider_ref(self, mock_repository):
        service = ReconcileDeliveryStatusService(mock_repository)
        dto = DeliveryStatusCallbackDTO(status="Delivered", provider_ref="SM123", recipient="+14155550100")

        result = await service.execute(dto)

        mock_repository.apply_provider_status.assert_called_once_with("delivered", provider_ref="SM123")
        assert result.status == "delivered"
        assert result.updated == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_recipient(self, mock_repository):
        mock_repository.apply_provider_status.return_value = 2
        service = ReconcileDeliveryStatusService(mock_repository)
        dto = DeliveryStatusCallbackDTO(status="undelivered", recipient="+14155550100")

        result = await service.execute(dto)

        mock_repository.apply_provider_status.assert_called_once_with(
            "undelivered", recipient="+14155550100"
        )
        assert result.updated == 2

    @pytest.mark.asyncio
    async def test_recipient_fallback_disabled_ignores_callback(self, mock_repository):
        service = ReconcileDeliveryStatusService(mock_repository, recipient_fallback=False)
        dto = DeliveryStatusCallbackDTO(status="delivered", recipient="+14155550100")

        result = await service.execute(dto)

        mock_repository.apply_provider_status.assert_not_called()
        assert result.updated == 0

    @pytest.mark.asyncio
    async def test_no_match_reports_zero(self, mock_repository):
        mock_repository.apply_provider_status.return_value = 0
        service = ReconcileDeliveryStatusService(mock_repository)

        result = await service.execute(DeliveryStatusCallbackDTO(status="delivered", provider_ref="SMnope"))

        assert result.updated == 0

    @pytest.mark.asyncio
    async def test_missing_correlation_key_raises_error(self, mock_repository):
        service = ReconcileDeliveryStatusService(mock_repository)

        with pytest.raises(ValidationError):
            await service.execute(DeliveryStatusCallbackDTO(status="delivered", provider_ref=" "))
        mock_repository.apply_provider_status.assert_not_called()
