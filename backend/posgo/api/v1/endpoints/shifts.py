from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from backend.posgo.api.deps import get_store, raise_http
from backend.posgo.api.permission_deps import require_permission
from backend.posgo.core.exceptions import NotFound, PosError
from backend.posgo.schemas.organization import UserProfile
from backend.posgo.schemas.shift import (
    ActiveShiftOut,
    CashMovement,
    CashShift,
    MovementRequest,
    ShiftCloseRequest,
    ShiftOpenRequest,
    ShiftReconciliation,
    ShiftReport,
    ShiftStatus,
)
from backend.posgo.services.shifts import CashShiftLedger
from backend.posgo.storage.base import DataStore

router = APIRouter()


@router.get("/active", response_model=ActiveShiftOut)
def get_active_shift(
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:shift")),
) -> ActiveShiftOut:
    shift_id = store.get_active_shift_id()
    if shift_id is None:
        return ActiveShiftOut(shift=None)
    try:
        shift = store.get_shift(shift_id)
    except NotFound:
        return ActiveShiftOut(shift=None)
    except PosError as e:
        raise_http(e)
    if shift.status != ShiftStatus.OPEN:
        return ActiveShiftOut(shift=None)
    return ActiveShiftOut(
        shift=shift, sales_total=CashShiftLedger(store).shift_sales_total(shift.id)
    )


@router.post("/open", response_model=CashShift, status_code=status.HTTP_201_CREATED)
def open_new_shift(
    payload: ShiftOpenRequest,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:shift")),
) -> CashShift:
    try:
        shift = CashShiftLedger(store).open_shift(payload.start_amount, store.get_active_shift_id())
        store.set_active_shift_id(shift.id)
    except PosError as e:
        raise_http(e)
    return shift


@router.post("/movements", response_model=CashMovement, status_code=status.HTTP_201_CREATED)
def record_movement(
    payload: MovementRequest,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:shift")),
) -> CashMovement:
    try:
        return CashShiftLedger(store).record_movement(
            store.get_active_shift_id(), payload.type, payload.amount, payload.description
        )
    except PosError as e:
        raise_http(e)


@router.post("/close", response_model=ShiftReport)
def close_current_shift(
    payload: ShiftCloseRequest,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:shift")),
) -> ShiftReport:
    try:
        report = CashShiftLedger(store).close_shift(store.get_active_shift_id(), payload.end_amount)
        store.set_active_shift_id(None)
    except PosError as e:
        raise_http(e)
    return report


@router.get("", response_model=list[CashShift])
def list_shifts(
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("pos:shift")),
) -> list[CashShift]:
    return store.list_shifts()


@router.get("/{shift_id}/report", response_model=ShiftReport)
def shift_report(
    shift_id: UUID,
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("shift:report")),
) -> ShiftReport:
    try:
        return CashShiftLedger(store).report(shift_id)
    except PosError as e:
        raise_http(e)


@router.post("/{shift_id}/reconcile", response_model=ShiftReconciliation)
def reconcile_shift(
    shift_id: UUID,
    repair: bool = Query(False),
    store: DataStore = Depends(get_store),
    _profile: UserProfile = Depends(require_permission("shift:report")),
) -> ShiftReconciliation:
    try:
        return CashShiftLedger(store).reconcile(shift_id, repair=repair)
    except PosError as e:
        raise_http(e)
