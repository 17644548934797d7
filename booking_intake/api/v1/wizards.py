from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from booking_intake.api.v1.schemas import (
    AuditPatchSchema,
    AvailabilitySchema,
    BookingTypeRequestSchema,
    ConsultationPatchSchema,
    ContactPatchSchema,
    DateRequestSchema,
    MeetingTypeRequestSchema,
    NotificationSchema,
    ReviewSchema,
    StartWizardRequestSchema,
    SubmitResponseSchema,
    TimeRequestSchema,
    WizardSnapshotSchema,
)
from booking_intake.application.dto.wizard_session import WizardSession
from booking_intake.application.exceptions import WizardSessionNotFound
from booking_intake.application.ports.booking_api import BookingApiPort
from booking_intake.infrastructure.store.memory_store import MemoryWizardSessionStore
from booking_intake.wiring.dependencies import get_booking_api, get_session_store, start_wizard_session

router = APIRouter()
logger = logging.getLogger(__name__)


def _load(store: MemoryWizardSessionStore, session_id: str) -> WizardSession:
    try:
        return store.get(session_id)
    except WizardSessionNotFound:
        raise HTTPException(status_code=404, detail="Wizard session not found")


def _snapshot(session_id: str, session: WizardSession) -> WizardSnapshotSchema:
    return WizardSnapshotSchema.from_session(session_id, session)


@router.post("", response_model=WizardSnapshotSchema, status_code=201)
def start(
    req: StartWizardRequestSchema,
    store: MemoryWizardSessionStore = Depends(get_session_store),
    api: BookingApiPort = Depends(get_booking_api),
):
    session_id, session = start_wizard_session(
        booking_type=req.type,
        time_zone=req.time_zone,
        store=store,
        api=api,
    )
    return _snapshot(session_id, session)


@router.get("/{session_id}", response_model=WizardSnapshotSchema)
def get_snapshot(session_id: str, store: MemoryWizardSessionStore = Depends(get_session_store)):
    return _snapshot(session_id, _load(store, session_id))


@router.delete("/{session_id}", status_code=204)
def discard(session_id: str, store: MemoryWizardSessionStore = Depends(get_session_store)) -> Response:
    if not store.discard(session_id):
        raise HTTPException(status_code=404, detail="Wizard session not found")
    return Response(status_code=204)


@router.patch("/{session_id}/contact", response_model=WizardSnapshotSchema)
def update_contact(
    session_id: str,
    req: ContactPatchSchema,
    store: MemoryWizardSessionStore = Depends(get_session_store),
):
    session = _load(store, session_id)
    try:
        session.wizard.update_contact(**req.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _snapshot(session_id, session)


@router.put("/{session_id}/booking-type", response_model=WizardSnapshotSchema)
async def set_booking_type(
    session_id: str,
    req: BookingTypeRequestSchema,
    store: MemoryWizardSessionStore = Depends(get_session_store),
):
    session = _load(store, session_id)
    try:
        await session.wizard.set_booking_type(req.type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _snapshot(session_id, session)


@router.put("/{session_id}/date", response_model=WizardSnapshotSchema)
async def select_date(
    session_id: str,
    req: DateRequestSchema,
    store: MemoryWizardSessionStore = Depends(get_session_store),
):
    session = _load(store, session_id)
    try:
        await session.wizard.select_date(req.selected_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _snapshot(session_id, session)


@router.post("/{session_id}/availability/refresh", response_model=AvailabilitySchema)
async def refresh_availability(session_id: str, store: MemoryWizardSessionStore = Depends(get_session_store)):
    session = _load(store, session_id)
    view = await session.wizard.refresh_availability()
    return AvailabilitySchema(status=view.status, slots=list(view.slots), headline=view.headline, hint=view.hint)


@router.put("/{session_id}/time", response_model=WizardSnapshotSchema)
def select_time(
    session_id: str,
    req: TimeRequestSchema,
    store: MemoryWizardSessionStore = Depends(get_session_store),
):
    session = _load(store, session_id)
    try:
        session.wizard.select_time(req.selected_time)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _snapshot(session_id, session)


@router.put("/{session_id}/meeting-type", response_model=WizardSnapshotSchema)
def set_meeting_type(
    session_id: str,
    req: MeetingTypeRequestSchema,
    store: MemoryWizardSessionStore = Depends(get_session_store),
):
    session = _load(store, session_id)
    session.wizard.set_meeting_type(req.meeting_type)
    return _snapshot(session_id, session)


@router.patch("/{session_id}/audit", response_model=WizardSnapshotSchema)
def update_audit(
    session_id: str,
    req: AuditPatchSchema,
    store: MemoryWizardSessionStore = Depends(get_session_store),
):
    session = _load(store, session_id)
    changes = req.model_dump(exclude_unset=True)
    wizard = session.wizard
    try:
        if "specific_areas" in changes:
            wizard.set_focus_areas(changes.pop("specific_areas") or [])
        if "current_systems" in changes:
            wizard.set_current_systems(changes.pop("current_systems") or [])
        if changes:
            wizard.update_audit(**changes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _snapshot(session_id, session)


@router.patch("/{session_id}/consultation", response_model=WizardSnapshotSchema)
def update_consultation(
    session_id: str,
    req: ConsultationPatchSchema,
    store: MemoryWizardSessionStore = Depends(get_session_store),
):
    session = _load(store, session_id)
    changes = req.model_dump(exclude_unset=True)
    wizard = session.wizard
    try:
        consultation_type = changes.pop("consultation_type", None)
        if consultation_type is not None:
            wizard.set_consultation_type(consultation_type)
        if changes:
            wizard.update_consultation(**changes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _snapshot(session_id, session)


@router.post("/{session_id}/advance", response_model=WizardSnapshotSchema)
def advance(session_id: str, store: MemoryWizardSessionStore = Depends(get_session_store)):
    session = _load(store, session_id)
    try:
        session.wizard.advance()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _snapshot(session_id, session)


@router.post("/{session_id}/retreat", response_model=WizardSnapshotSchema)
def retreat(session_id: str, store: MemoryWizardSessionStore = Depends(get_session_store)):
    session = _load(store, session_id)
    session.wizard.retreat()
    return _snapshot(session_id, session)


@router.get("/{session_id}/review", response_model=ReviewSchema)
def review(session_id: str, store: MemoryWizardSessionStore = Depends(get_session_store)):
    session = _load(store, session_id)
    try:
        summary = session.wizard.review()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ReviewSchema.from_summary(summary)


@router.post("/{session_id}/submit", response_model=SubmitResponseSchema)
async def submit(session_id: str, store: MemoryWizardSessionStore = Depends(get_session_store)):
    session = _load(store, session_id)
    try:
        result = await session.wizard.submit()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result.action == "in_progress":
        raise HTTPException(status_code=409, detail="Submission already in progress")

    notifications = [NotificationSchema.from_entity(n) for n in session.notifier.drain()]
    if result.ok:
        store.discard(session_id)
        logger.info("Wizard session closed", extra={"session_id": session_id, "status": result.action})

    return SubmitResponseSchema(
        action=result.action,
        booking=result.booking,
        error=result.error,
        notifications=notifications,
    )
