"""Snapshot export and import routes."""
import logging

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile

from rollingstock.api.dependencies import get_backup_manager, get_repository
from rollingstock.infra.Snapshot_Repository import SnapshotRepository
from rollingstock.utilities.backup import BackupManager
from rollingstock.utilities.export_import import (
    MalformedImportPayload,
    OversizedImport,
    SnapshotExporter,
    SnapshotImporter,
    default_export_filename,
)

router = APIRouter(prefix='/api', tags=['transfer'])
logger = logging.getLogger(__name__)


def _attachment(content: str, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get('/export')
def export_json(repo: SnapshotRepository = Depends(get_repository)):
    exporter = SnapshotExporter(repo.load_state())
    return _attachment(exporter.to_json(), "application/json", default_export_filename())


@router.get('/export.csv')
def export_csv(repo: SnapshotRepository = Depends(get_repository)):
    exporter = SnapshotExporter(repo.load_state())
    return _attachment(exporter.to_csv(), "text/csv", default_export_filename(suffix='csv'))


@router.post('/import')
async def import_snapshot(file: UploadFile = File(...),
                          repo: SnapshotRepository = Depends(get_repository),
                          backups: BackupManager = Depends(get_backup_manager)):
    importer = SnapshotImporter()
    # one byte past the limit is enough to reject without reading the rest
    raw = await file.read(importer.max_bytes + 1)
    try:
        new_state = importer.apply(repo.load_state(), raw)
    except OversizedImport as e:
        raise HTTPException(status_code=413, detail=f"File is too large (maximum {e.limit} bytes)") from e
    except MalformedImportPayload as e:
        raise HTTPException(status_code=400, detail=f"Could not import the JSON file: {e}") from e

    backups.create_backup(repo.path.name)
    repo.replace_state(new_state)
    logger.info("Imported snapshot %s (%d items)", file.filename, len(new_state.items))
    return {
        'status': 'success',
        'items': len(new_state.items),
        'family': new_state.family.to_dict(),
        'alertMonths': new_state.alert_months,
    }
