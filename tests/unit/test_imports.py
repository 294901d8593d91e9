import importlib
import pkgutil

import pytest

import sms_scheduler


def all_modules() -> list[str]:
    return sorted(
        info.name
        for info in pkgutil.walk_packages(sms_scheduler.__path__, prefix="sms_scheduler.")
    )


class TestPackageImports:
    def test_walk_finds_repository_modules(self):
        modules = all_modules()

        assert "sms_scheduler.application.ports.outbound.message_repository" in modules
        assert "sms_scheduler.infrastructure.persistence.message_repository" in modules

    @pytest.mark.parametrize("module_name", all_modules())
    def test_module_imports(self, module_name):
        importlib.import_module(module_name)

    def test_repository_return_annotations_are_deferred(self):
        from sms_scheduler.application.ports.outbound import MessageRepository
        from sms_scheduler.infrastructure.persistence import SqlAlchemyMessageRepository

        for cls in (MessageRepository, SqlAlchemyMessageRepository):
            assert cls.find_due.__annotations__["return"] == "list[ScheduledMessage]"
            assert callable(cls.list)
