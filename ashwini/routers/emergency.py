"""
Emergency Router

POST /emergency/sos   - Manual SOS from the app
POST /emergency/crash - Crash detected by the device's driving monitor

Both send one SMS to the configured emergency contact and report the
dispatch outcome; a failed send is not an HTTP error.
"""

from fastapi import APIRouter

from ashwini.core.alert_dispatcher import alert_dispatcher
from ashwini.core.alerts import AlertCategory, build_alert_message
from ashwini.models.schemas import DispatchResult

router = APIRouter()


@router.post("/sos", response_model=DispatchResult)
async def manual_sos() -> DispatchResult:
    message = build_alert_message(AlertCategory.SOS)
    return await alert_dispatcher.dispatch_to_emergency_contact(message)


@router.post("/crash", response_model=DispatchResult)
async def crash_detected() -> DispatchResult:
    message = build_alert_message(AlertCategory.CRASH)
    return await alert_dispatcher.dispatch_to_emergency_contact(message)
