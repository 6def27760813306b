"""Shared FastAPI dependencies; tests override them through app.dependency_overrides."""
from datetime import date

from rollingstock.infra.paths import BACKUP_DIR, DATA_DIR
from rollingstock.infra.Snapshot_Repository import SnapshotRepository
from rollingstock.utilities.backup import BackupManager


def get_repository() -> SnapshotRepository:
    return SnapshotRepository()


def get_backup_manager() -> BackupManager:
    return BackupManager(DATA_DIR, BACKUP_DIR)


def get_today() -> date:
    return date.today()
