"""Tests for container wiring."""

import asyncio

from bottle_tracker.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.analysis_service.file_name == settings.data_file_name
    assert container.upload_service.blob_store is container.analysis_service.blob_store
    asyncio.run(container.close_resources())
