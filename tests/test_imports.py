"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_customer_schema(self):
        from customer_counts.schemas.customer_schema import (
            Category, CustomerRecord, LIST_CATEGORIES,
        )
        assert Category.VISITORS == "visitors"
        assert Category.REGISTERED_CUSTOMERS not in LIST_CATEGORIES
        assert CustomerRecord().id is None

    def test_import_view_schema(self):
        from customer_counts.schemas.view_schema import CountsSnapshot, SelectionState
        assert CountsSnapshot() == CountsSnapshot(0, 0)
        assert SelectionState().category is None

    def test_import_save_schema(self):
        from customer_counts.schemas.save_schema import SaveStatus
        assert SaveStatus.NOTHING_TO_SAVE == "nothing_to_save"


class TestCoreImports:
    def test_import_core_package(self):
        from customer_counts.core import (
            CountsAggregator, CustomerCountScreen, EditScratchStore,
            ReminderEnricher, SaveReconciler, ViewState,
        )
        state = ViewState()
        assert state.records == []
        assert len(state.scratch) == 0
        assert not state.detail_open

    def test_import_remote_package(self):
        from customer_counts.remote import MockCustomerBackend, RemoteGateway
        assert len(MockCustomerBackend().customers) == 3


class TestConfigImport:
    def test_import_config(self):
        from customer_counts.config import settings
        assert settings.api.base_url.startswith("http")
        assert settings.api.timeout_seconds > 0


class TestConsoleDemo:
    def test_console_demo_imports(self):
        from console_demo import ConsoleScreenDemo
        demo = ConsoleScreenDemo()
        assert demo.screen.state.counts.visitor_count == 0
        assert demo.backend.calls == []
