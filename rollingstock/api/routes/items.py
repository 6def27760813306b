"""Stock item routes: listing, single-record edits, clear all."""
import logging
from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from rollingstock.api.dependencies import get_backup_manager, get_repository, get_today
from rollingstock.infra.Snapshot_Repository import SnapshotRepository
from rollingstock.logic.expiry.classifier import classify_expiration
from rollingstock.logic.inventory.listing import query_items
from rollingstock.utilities.backup import BackupManager
from rollingstock.utilities.validators import validate_item

router = APIRouter(prefix='/api/items', tags=['items'])
logger = logging.getLogger(__name__)


def _validated(data: Dict[str, Any]):
    item = validate_item(data)
    if item is None:
        raise HTTPException(status_code=400, detail='Item name is required')
    return item


@router.get('')
def list_items(q: str = Query(default=''),
               sort: Optional[str] = Query(default=None),
               page: int = Query(default=1),
               repo: SnapshotRepository = Depends(get_repository),
               today: date = Depends(get_today)):
    state = repo.load_state()
    return query_items(state.items, today, state.alert_months, search=q, sort=sort, page=page)


@router.post('')
def add_item(data: Dict[str, Any] = Body(...),
             repo: SnapshotRepository = Depends(get_repository),
             today: date = Depends(get_today)):
    item = _validated(data)
    items = repo.add_item(item)
    logger.info("Added item %r", item.name)
    return {
        'index': len(items) - 1,
        'item': item.to_dict(),
        'status': classify_expiration(item, today, repo.load_alert_months()).value,
    }


@router.put('/{index}')
def edit_item(index: int, data: Dict[str, Any] = Body(...),
              repo: SnapshotRepository = Depends(get_repository)):
    item = _validated(data)
    try:
        repo.replace_item(index, item)
    except IndexError:
        raise HTTPException(status_code=404, detail='Item not found')
    return {'index': index, 'item': item.to_dict()}


@router.delete('/{index}')
def delete_item(index: int, repo: SnapshotRepository = Depends(get_repository)):
    try:
        removed = repo.delete_item(index)
    except IndexError:
        raise HTTPException(status_code=404, detail='Item not found')
    logger.info("Deleted item %r", removed.name)
    return {'deleted': removed.to_dict()}


@router.delete('')
def clear_items(repo: SnapshotRepository = Depends(get_repository),
                backups: BackupManager = Depends(get_backup_manager)):
    backups.create_backup(repo.path.name)
    count = len(repo.load_items())
    repo.clear_items()
    logger.info("Cleared %d items", count)
    return {'cleared': count}
