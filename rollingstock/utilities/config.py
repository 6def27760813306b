"""Configuration management for the RollingStock Planner."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Import / Export
IMPORT_MAX_BYTES: Final[int] = int(os.getenv('IMPORT_MAX_BYTES', str(10 * 1024 * 1024)))

# Alerts
ROLLING_WINDOW_DAYS: Final[int] = int(os.getenv('ROLLING_WINDOW_DAYS', '14'))

# Listing
ITEMS_PER_PAGE: Final[int] = int(os.getenv('ITEMS_PER_PAGE', '50'))

# Backups
BACKUP_KEEP: Final[int] = int(os.getenv('BACKUP_KEEP', '10'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('ROLLINGSTOCK_DATA_DIR', str(BASE_DIR / 'data')))
