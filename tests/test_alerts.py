"""Tests for the alert decision and message templates."""

import pytest

from ashwini.core.alerts import (
    AlertCategory,
    alert_category_for,
    build_alert_message,
    needs_alert,
)
from ashwini.models.schemas import MedicalResult, Severity


@pytest.mark.parametrize("token, expected", [
    ("HIGH", True),
    ("high", True),
    ("MEDIUM", False),
    ("LOW", False),
    ("NONE", False),
    ("ALTO", False),
    (None, False),
])
def test_needs_alert_only_for_high(token, expected):
    result = MedicalResult.model_validate({"criticalAlert": token, "summary": "s"})
    assert needs_alert(result) is expected


def test_unknown_severity_token_is_none():
    result = MedicalResult.model_validate({"criticalAlert": "Elevado"})
    assert result.critical_alert is Severity.NONE


@pytest.mark.parametrize("report_type, expected", [
    ("ECG", AlertCategory.CARDIAC),
    ("Kidney Report", AlertCategory.MEDICAL),
    ("Lab Report", AlertCategory.MEDICAL),
])
def test_high_result_category_depends_on_report_type(report_type, expected):
    result = MedicalResult(critical_alert=Severity.HIGH, summary="s")
    assert alert_category_for(result, report_type) is expected


def test_no_category_below_high():
    result = MedicalResult(critical_alert=Severity.MEDIUM, summary="s")
    assert alert_category_for(result, "ECG") is None


def test_medical_message_embeds_report_type_and_summary():
    message = build_alert_message(
        AlertCategory.MEDICAL,
        report_type="Lab Report",
        summary="Potassium is dangerously high.",
    )
    assert "Report Type: Lab Report" in message
    assert '"Potassium is dangerously high."' in message
    assert "Urgency: HIGH" in message


def test_cardiac_message_embeds_summary():
    message = build_alert_message(AlertCategory.CARDIAC, summary="ST elevation.")
    assert message.startswith("CRITICAL ECG ALERT")
    assert '"ST elevation."' in message


@pytest.mark.parametrize("category", [AlertCategory.CRASH, AlertCategory.SOS])
def test_fixed_messages_need_no_fields(category):
    assert "check on them immediately" in build_alert_message(category)
