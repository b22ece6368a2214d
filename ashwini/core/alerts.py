"""
Alert Decision

Decides whether a result warrants an outbound alert and composes the
message text.  Sending is left to AlertDispatcher.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ashwini.models.schemas import MedicalResult, Severity
from ashwini.prompts.builder import TemplateKey, template_key_for_report_type


class AlertCategory(str, Enum):
    CARDIAC = "cardiac"
    MEDICAL = "medical"
    CRASH = "crash"
    SOS = "sos"


_MESSAGES: dict[AlertCategory, str] = {
    AlertCategory.CARDIAC: (
        "CRITICAL ECG ALERT: POTENTIAL HEART ATTACK DETECTED.\n"
        'Summary: "{summary}"\n'
        "This is a time-sensitive emergency. Please seek immediate medical attention."
    ),
    AlertCategory.MEDICAL: (
        "URGENT MEDICAL ALERT\n"
        "Report Type: {report_type}\n"
        'Summary: "{summary}"\n'
        "Urgency: HIGH. Please consult a healthcare provider immediately."
    ),
    AlertCategory.CRASH: (
        "DRIVING EMERGENCY: Potential Crash Detection. The user's device "
        "detected a loud sound consistent with a vehicle crash. Please check "
        "on them immediately."
    ),
    AlertCategory.SOS: (
        "MANUAL SOS ALERT: The user has triggered an SOS from the app. "
        "Please check on them immediately."
    ),
}


def needs_alert(result: MedicalResult) -> bool:
    """True when the analysis is HIGH severity."""
    return result.critical_alert is Severity.HIGH


def alert_category_for(result: MedicalResult, report_type: str) -> Optional[AlertCategory]:
    """Category of alert a medical result triggers, or None."""
    return alert_category_for_severity(result.critical_alert, report_type)


def alert_category_for_severity(
    severity: Severity,
    report_type: str,
) -> Optional[AlertCategory]:
    """HIGH severity on an ECG is a cardiac alert; HIGH severity on any other
    report type is a general urgent medical alert.
    """
    if severity is not Severity.HIGH:
        return None
    if template_key_for_report_type(report_type) is TemplateKey.ECG:
        return AlertCategory.CARDIAC
    return AlertCategory.MEDICAL


def build_alert_message(
    category: AlertCategory,
    report_type: str = "",
    summary: str = "",
) -> str:
    """Render the SMS body for *category*."""
    return _MESSAGES[category].format(report_type=report_type, summary=summary)
