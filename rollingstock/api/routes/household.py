"""Household profile and alert threshold routes (wholesale replace, never patched)."""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from rollingstock.api.dependencies import get_repository
from rollingstock.infra.Snapshot_Repository import SnapshotRepository
from rollingstock.logic.inventory.sufficiency import compute_needs
from rollingstock.utilities.constants import DEFAULT_FAMILY
from rollingstock.utilities.validators import validate_alert_months, validate_family

router = APIRouter(prefix='/api', tags=['household'])


def _family_response(family):
    return {'family': family.to_dict(), 'needs': compute_needs(family).to_dict()}


@router.get('/family')
def get_family(repo: SnapshotRepository = Depends(get_repository)):
    return _family_response(repo.load_family())


@router.put('/family')
def put_family(data: Dict[str, Any] = Body(...), repo: SnapshotRepository = Depends(get_repository)):
    family = validate_family(data)
    repo.save_family(family)
    return _family_response(family)


@router.post('/family/reset')
def reset_family(repo: SnapshotRepository = Depends(get_repository)):
    family = validate_family(DEFAULT_FAMILY)
    repo.save_family(family)
    return _family_response(family)


@router.get('/alert-months')
def get_alert_months(repo: SnapshotRepository = Depends(get_repository)):
    return {'alertMonths': repo.load_alert_months()}


@router.put('/alert-months')
def put_alert_months(data: Dict[str, Any] = Body(...), repo: SnapshotRepository = Depends(get_repository)):
    months = validate_alert_months(data.get('alertMonths'))
    repo.save_alert_months(months)
    return {'alertMonths': months}
