"""Evaluation routes: totals, needs, coverage, expiry alerts, advice, statistics, PDF."""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from rollingstock.api.dependencies import get_repository, get_today
from rollingstock.events.event_helpers import publish_expiry_alerts
from rollingstock.events.web_observers import get_events
from rollingstock.infra.Snapshot_Repository import SnapshotRepository
from rollingstock.infra.pdf_utils import generate_pdf_for_report
from rollingstock.logic.expiry.classifier import compute_expiry_alerts
from rollingstock.logic.inventory.sufficiency import compute_coverage, compute_needs, compute_totals
from rollingstock.logic.reporting.advisory import build_report
from rollingstock.utilities.statistics import InventoryStats

router = APIRouter(prefix='/api', tags=['report'])
logger = logging.getLogger(__name__)


@router.get('/totals')
def api_totals(repo: SnapshotRepository = Depends(get_repository)):
    return compute_totals(repo.load_items()).to_dict()


@router.get('/needs')
def api_needs(repo: SnapshotRepository = Depends(get_repository)):
    return compute_needs(repo.load_family()).to_dict()


@router.get('/coverage')
def api_coverage(repo: SnapshotRepository = Depends(get_repository)):
    state = repo.load_state()
    return compute_coverage(state.items, state.family).to_dict()


@router.get('/expiry')
def api_expiry(repo: SnapshotRepository = Depends(get_repository), today: date = Depends(get_today)):
    state = repo.load_state()
    alerts = compute_expiry_alerts(state.items, today, state.alert_months)
    publish_expiry_alerts(alerts, today)
    return alerts.to_dict()


@router.get('/advice')
def api_advice(repo: SnapshotRepository = Depends(get_repository), today: date = Depends(get_today)):
    state = repo.load_state()
    coverage = compute_coverage(state.items, state.family)
    alerts = compute_expiry_alerts(state.items, today, state.alert_months)
    return build_report(state.items, state.family, coverage, alerts).to_dict()


@router.get('/stats')
def api_stats(repo: SnapshotRepository = Depends(get_repository)):
    state = repo.load_state()
    return InventoryStats(state.items, state.family).generate_report()


@router.get('/alerts/events')
def api_alert_events(since: Optional[int] = Query(default=None)):
    return get_events(since)


@router.get('/report.pdf')
def api_report_pdf(repo: SnapshotRepository = Depends(get_repository), today: date = Depends(get_today)):
    state = repo.load_state()
    coverage = compute_coverage(state.items, state.family)
    alerts = compute_expiry_alerts(state.items, today, state.alert_months)
    report = build_report(state.items, state.family, coverage, alerts)
    pdf_bytes = generate_pdf_for_report(report, state.items, today, state.alert_months)
    filename = f"rollingstock-report_{today.strftime('%Y%m%d')}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
