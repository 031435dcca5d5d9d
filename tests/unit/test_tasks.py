"""Tests for the storage purge task."""

from unittest.mock import MagicMock

import pytest

from cloudspace.config import Settings, get_settings
from cloudspace.services.storage import create_storage_service
from cloudspace.workers import tasks


class TestPurgeStorageObject:
    def test_purge_removes_blob(self):
        storage = create_storage_service(get_settings())
        storage.upload_bytes(b"left behind", "ws-purge/k_orphan.txt")

        tasks.purge_storage_object.run("ws-purge/k_orphan.txt")

        assert not (storage.root / "ws-purge/k_orphan.txt").exists()

    def test_purge_of_missing_blob_is_quiet(self):
        tasks.purge_storage_object.run("ws-purge/never-existed.txt")


class TestScheduleStoragePurge:
    @pytest.fixture
    def redis_broker(self, monkeypatch):
        monkeypatch.setattr(tasks.celery_app.conf, "broker_url", "redis://localhost:6379/0")

    def test_queues_task(self, redis_broker, monkeypatch):
        delay = MagicMock()
        monkeypatch.setattr(tasks.purge_storage_object, "delay", delay)

        tasks.schedule_storage_purge("ws-1/k_a.txt")

        delay.assert_called_once_with("ws-1/k_a.txt")

    def test_broker_failure_is_logged_not_raised(self, redis_broker, monkeypatch, caplog):
        monkeypatch.setattr(tasks.purge_storage_object, "delay", MagicMock(side_effect=ConnectionError("broker down")))

        tasks.schedule_storage_purge("ws-1/k_a.txt")

        assert "ws-1/k_a.txt" in caplog.text

    def test_default_memory_broker_leaves_blob_and_logs(self, monkeypatch, caplog):
        default_broker = Settings(_env_file=None).CELERY_BROKER_URL
        monkeypatch.setattr(tasks.celery_app.conf, "broker_url", default_broker)
        delay = MagicMock()
        monkeypatch.setattr(tasks.purge_storage_object, "delay", delay)

        storage = create_storage_service(get_settings())
        storage.upload_bytes(b"orphan", "ws-p/k_o.txt")

        tasks.schedule_storage_purge("ws-p/k_o.txt")

        assert not tasks.broker_configured()
        delay.assert_not_called()
        assert "ws-p/k_o.txt" in caplog.text
        assert "blob left behind" in caplog.text
        assert (storage.root / "ws-p/k_o.txt").exists()
