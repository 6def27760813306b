from pathlib import Path

from rollingstock.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()
SNAPSHOT_FILE = DATA_DIR / 'rollingstock.json'
BACKUP_DIR = DATA_DIR / 'backups'

__all__ = ['DATA_DIR', 'SNAPSHOT_FILE', 'BACKUP_DIR']
