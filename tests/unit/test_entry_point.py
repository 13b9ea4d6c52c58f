"""Unit tests for the API entry point"""

from fastapi import FastAPI

from config import ApplicationConfig


class TestEntryPoint:

    def test_module_exposes_dashboard_app(self):
        import api

        assert isinstance(api.app, FastAPI)
        assert api.app.title == "Receivables Dashboard"
        assert any(route.path == "/invoices/{invoice_id}/remark" for route in api.app.routes)

    def test_auto_reload_is_off_unless_configured(self):
        assert isinstance(ApplicationConfig.API_RELOAD, bool)
