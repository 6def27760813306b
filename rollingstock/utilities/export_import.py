"""
Export and Import of inventory snapshots.

Snapshot shape:
    {"meta": {"app": str, "ver": int}, "items": [...], "family": {...}, "alertMonths": int}
"""
import csv
import io
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

from rollingstock.domain.Snapshot import InventoryState
from rollingstock.utilities.config import IMPORT_MAX_BYTES
from rollingstock.utilities.constants import CATEGORY_LABELS
from rollingstock.utilities.validators import (
    validate_alert_months,
    validate_family,
    validate_items,
)

logger = logging.getLogger(__name__)


class ImportRejected(ValueError):
    """The import payload was refused; current state is left untouched."""


class OversizedImport(ImportRejected):
    def __init__(self, size: int, limit: int):
        super().__init__(f"File is too large ({size} bytes, maximum {limit} bytes)")
        self.size = size
        self.limit = limit


class MalformedImportPayload(ImportRejected):
    pass


def default_export_filename(now: Optional[datetime] = None, suffix: str = "json") -> str:
    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"rollingstock-data_{timestamp}.{suffix}"


class SnapshotExporter:
    """Export the current inventory state."""

    def __init__(self, state: InventoryState):
        self.state = state

    def to_dict(self) -> Dict[str, Any]:
        return self.state.to_snapshot()

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def to_csv(self) -> str:
        """Stock list as CSV for spreadsheet use."""
        buffer = io.StringIO()
        fieldnames = ['name', 'category', 'category_label', 'quantity', 'unit', 'expiry', 'kcal', 'total_kcal']
        writer = csv.DictWriter(buffer, fieldnames=fieldnames)
        writer.writeheader()
        for item in self.state.items:
            row = item.to_dict()
            writer.writerow({
                'name': row['name'],
                'category': row['category'],
                'category_label': CATEGORY_LABELS.get(item.category, item.category),
                'quantity': row['quantity'],
                'unit': row['unit'],
                'expiry': row['expiry'],
                'kcal': '' if row['kcal'] is None else row['kcal'],
                'total_kcal': '' if item.total_kcal is None else item.total_kcal,
            })
        return buffer.getvalue()

    def export_json(self, output_path: Optional[Path] = None) -> Path:
        """Write the snapshot to a JSON file and return its path."""
        if output_path is None:
            output_path = Path(default_export_filename())
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info(f"Exported {len(self.state.items)} items to {output_path}")
        return output_path


class SnapshotImporter:
    """Parse and validate an import payload into a partial state."""

    def __init__(self, max_bytes: int = IMPORT_MAX_BYTES):
        self.max_bytes = max_bytes

    def parse(self, raw: Union[bytes, str]) -> Dict[str, Any]:
        """
        Returns the present top-level fields, validated:
            {'items': [StockItem], 'family': HouseholdProfile, 'alert_months': int}
        Absent fields are omitted.

        Raises:
            OversizedImport: payload larger than max_bytes (checked before parsing)
            MalformedImportPayload: not JSON, or not a JSON object
        """
        data = raw.encode('utf-8') if isinstance(raw, str) else raw
        if len(data) > self.max_bytes:
            logger.warning("Import rejected: %d bytes exceeds %d", len(data), self.max_bytes)
            raise OversizedImport(len(data), self.max_bytes)

        try:
            payload = json.loads(data.decode('utf-8-sig'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Import rejected: invalid JSON (%s)", e)
            raise MalformedImportPayload("Could not read the JSON file") from e
        if not isinstance(payload, dict):
            logger.warning("Import rejected: top level is %s, not an object", type(payload).__name__)
            raise MalformedImportPayload("Expected a JSON object at the top level")

        partial: Dict[str, Any] = {}
        if isinstance(payload.get('items'), list):
            partial['items'] = validate_items(payload['items'])
        if isinstance(payload.get('family'), dict):
            partial['family'] = validate_family(payload['family'])
        months = payload.get('alertMonths')
        if isinstance(months, (int, float)) and not isinstance(months, bool):
            partial['alert_months'] = validate_alert_months(months)

        logger.info("Parsed import with fields: %s", ', '.join(sorted(partial)) or 'none')
        return partial

    def apply(self, state: InventoryState, raw: Union[bytes, str]) -> InventoryState:
        """Parse the payload and merge it over state; raises before any change on rejection."""
        return state.merged(self.parse(raw))

    def import_file(self, state: InventoryState, input_path: Path) -> InventoryState:
        path = Path(input_path)
        size = path.stat().st_size
        if size > self.max_bytes:
            logger.warning("Import rejected: %s is %d bytes", path, size)
            raise OversizedImport(size, self.max_bytes)
        return self.apply(state, path.read_bytes())


# CLI interface
if __name__ == "__main__":
    import argparse
    from rollingstock.infra.Snapshot_Repository import SnapshotRepository

    parser = argparse.ArgumentParser(description='Export/Import RollingStock data')
    parser.add_argument('action', choices=['export', 'import'], help='Action to perform')
    parser.add_argument('--format', choices=['json', 'csv'], default='json', help='Export format')
    parser.add_argument('--file', help='Input/output file path')

    args = parser.parse_args()
    repo = SnapshotRepository()

    if args.action == 'export':
        exporter = SnapshotExporter(repo.load_state())
        if args.format == 'csv':
            output = Path(args.file or default_export_filename(suffix='csv'))
            output.write_text(exporter.to_csv(), encoding='utf-8')
        else:
            output = exporter.export_json(Path(args.file) if args.file else None)
        print(f"✓ Exported to: {output}")

    elif args.action == 'import':
        if not args.file:
            print("Error: --file is required for import")
            raise SystemExit(1)
        try:
            new_state = SnapshotImporter().import_file(repo.load_state(), Path(args.file))
        except ImportRejected as e:
            print(f"✗ Import failed: {e}")
            raise SystemExit(1)
        repo.replace_state(new_state)
        print(f"✓ Successfully imported from: {args.file}")
