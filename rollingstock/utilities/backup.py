"""
Backup utility for the snapshot store.
Copies the store to a timestamped file before destructive changes (import, clear all).
"""
import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from rollingstock.utilities.config import BACKUP_KEEP

logger = logging.getLogger(__name__)

_BACKUP_SUFFIX = re.compile(r'_\d{8}_\d{6}(?:_\d+)*$')


class BackupManager:
    """Manages timestamped backups of data files."""

    def __init__(self, data_dir: Path, backup_dir: Optional[Path] = None, keep: int = BACKUP_KEEP):
        self.data_dir = Path(data_dir)
        self.backup_dir = Path(backup_dir) if backup_dir else (self.data_dir / 'backups')
        self.keep = keep
        self.backup_dir.mkdir(parents=True, exist_ok=True)

    def create_backup(self, filename: str) -> Optional[Path]:
        """Create a timestamped backup of a data file; None when there is nothing to back up."""
        source = self.data_dir / filename
        if not source.exists():
            logger.warning(f"File not found for backup: {filename}")
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        destination = self.backup_dir / f"{source.stem}_{timestamp}{source.suffix}"
        counter = 1
        while destination.exists():
            destination = self.backup_dir / f"{source.stem}_{timestamp}_{counter}{source.suffix}"
            counter += 1

        try:
            shutil.copy2(source, destination)
        except OSError as e:
            logger.error(f"Backup failed for {filename}: {e}")
            return None
        logger.info(f"Backup created: {destination.name}")

        self._cleanup_old_backups(source.name)
        return destination

    def _cleanup_old_backups(self, filename: str):
        """Remove old backups, keeping only the most recent ones."""
        backups = self.list_backups(filename)
        for backup in backups[self.keep:]:
            try:
                (self.backup_dir / backup['name']).unlink()
                logger.info(f"Removed old backup: {backup['name']}")
            except OSError as e:
                logger.error(f"Failed to remove old backup {backup['name']}: {e}")

    def restore_backup(self, backup_filename: str) -> bool:
        """Restore a specific backup file over its original."""
        backup_path = self.backup_dir / backup_filename
        if not backup_path.exists():
            logger.error(f"Backup not found: {backup_filename}")
            return False

        original_name = _BACKUP_SUFFIX.sub('', backup_path.stem) + backup_path.suffix
        destination = self.data_dir / original_name

        # Keep the current file recoverable too
        if destination.exists():
            self.create_backup(destination.name)

        try:
            shutil.copy2(backup_path, destination)
        except OSError as e:
            logger.error(f"Restore failed for {backup_filename}: {e}")
            return False
        logger.info(f"Restored backup: {backup_filename} -> {original_name}")
        return True

    def list_backups(self, filename: Optional[str] = None) -> list:
        """List backups newest first (timestamped names sort chronologically)."""
        if filename:
            pattern = f"{Path(filename).stem}_*{Path(filename).suffix}"
        else:
            pattern = "*"

        backups = sorted(
            (p for p in self.backup_dir.glob(pattern) if p.is_file()),
            key=lambda p: p.name,
            reverse=True
        )

        return [
            {
                'name': b.name,
                'size': b.stat().st_size,
                'created': datetime.fromtimestamp(b.stat().st_mtime).strftime('%Y-%m-%d %H:%M:%S')
            }
            for b in backups
        ]
