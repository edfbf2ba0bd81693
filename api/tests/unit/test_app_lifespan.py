"""
Tests del arranque de la aplicacion (lifespan).
"""
from __future__ import annotations

import pytest
from fastapi import FastAPI

from nps_sync.application.services.record_mapper import MappingStrategy
from nps_sync.core.config import settings
from nps_sync.core.events import startup_handler
from nps_sync.shared.exceptions.sync import SyncConfigError


@pytest.fixture
def unconfigured_settings(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "NOTION_TOKEN", "")
    monkeypatch.setattr(settings, "NOTION_DATABASE_ID", "")
    monkeypatch.setattr(settings, "LOG_FILE", str(tmp_path / "sync.log"))
    return settings


@pytest.mark.asyncio
async def test_invalid_mapping_strategy_stops_startup(unconfigured_settings, monkeypatch) -> None:
    monkeypatch.setattr(settings, "MAPPING_STRATEGY", "joined")
    app = FastAPI()

    with pytest.raises(SyncConfigError) as exc_info:
        await startup_handler(app)()

    assert exc_info.value.error_code == "CONFIG_ERROR"
    assert not hasattr(app.state, "mapping_strategy")


@pytest.mark.asyncio
async def test_lifespan_parses_strategy_once_without_external_clients(unconfigured_settings, monkeypatch) -> None:
    monkeypatch.setattr(settings, "MAPPING_STRATEGY", " FLAT ")
    from main import create_application
    app = create_application()

    async with app.router.lifespan_context(app):
        assert app.state.mapping_strategy is MappingStrategy.FLAT
        assert getattr(app.state, "document_store", None) is None
        assert getattr(app.state, "notion_client", None) is None


@pytest.mark.asyncio
async def test_lifespan_propagates_startup_errors(unconfigured_settings, monkeypatch) -> None:
    monkeypatch.setattr(settings, "MAPPING_STRATEGY", "joined")
    from main import create_application
    app = create_application()

    with pytest.raises(SyncConfigError):
        async with app.router.lifespan_context(app):
            pass
