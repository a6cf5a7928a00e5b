"""
Unit tests for ConflictClassifier.

Tests:
- Code table and category of every kind
- Spring-style code normalization
- Unclassified fallback keeps the raw message
"""

import pytest

from clinic_scheduling.domains.scheduling.application.ports import ExternalResponse
from clinic_scheduling.domains.scheduling.application.services import ConflictClassifier
from clinic_scheduling.domains.scheduling.domain.value_objects import ConflictCategory, ConflictKind


@pytest.fixture
def classifier() -> ConflictClassifier:
    """Create a classifier."""
    return ConflictClassifier()


@pytest.mark.unit
@pytest.mark.parametrize(
    "code,kind,category",
    [
        ("HOLIDAY_CONFLICT", ConflictKind.HOLIDAY_CONFLICT, ConflictCategory.SCHEDULING_CONFLICT),
        ("SLOT_CONFLICT", ConflictKind.SLOT_CONFLICT, ConflictCategory.SCHEDULING_CONFLICT),
        ("ROOM_SLOT_TAKEN", ConflictKind.SLOT_CONFLICT, ConflictCategory.SCHEDULING_CONFLICT),
        ("EMPLOYEE_SHIFT_NOT_COVERING", ConflictKind.SLOT_CONFLICT, ConflictCategory.SCHEDULING_CONFLICT),
        ("SHIFT_FINALIZED", ConflictKind.SHIFT_FINALIZED, ConflictCategory.ILLEGAL_STATE_TRANSITION),
        ("CANNOT_CANCEL_COMPLETED", ConflictKind.SHIFT_FINALIZED, ConflictCategory.ILLEGAL_STATE_TRANSITION),
        (
            "INVALID_STATUS_TRANSITION",
            ConflictKind.ILLEGAL_STATUS_TRANSITION,
            ConflictCategory.ILLEGAL_STATE_TRANSITION,
        ),
        ("CANNOT_CANCEL_BATCH", ConflictKind.CANNOT_CANCEL_BATCH, ConflictCategory.POLICY_VIOLATION),
        ("FORBIDDEN", ConflictKind.FORBIDDEN, ConflictCategory.AUTHORIZATION),
        ("SHIFT_NOT_FOUND", ConflictKind.RESOURCE_NOT_FOUND, ConflictCategory.NOT_FOUND),
        ("RELATED_RESOURCE_NOT_FOUND", ConflictKind.RESOURCE_NOT_FOUND, ConflictCategory.NOT_FOUND),
        ("PATIENT_NOT_FOUND", ConflictKind.RESOURCE_NOT_FOUND, ConflictCategory.NOT_FOUND),
        ("VALIDATION_ERROR", ConflictKind.VALIDATION_FAILED, ConflictCategory.VALIDATION),
        ("PAST_DATE_NOT_ALLOWED", ConflictKind.VALIDATION_FAILED, ConflictCategory.VALIDATION),
    ],
)
def test_classifies_known_codes(classifier, code, kind, category):
    """Test every known code lands on its kind and category."""
    conflict = classifier.classify(code, "backend says no")

    assert conflict.kind == kind
    assert conflict.category == category
    assert conflict.raw_message == "backend says no"


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,normalized",
    [
        ("error.invalid.status.transition", "INVALID_STATUS_TRANSITION"),
        ("error.ROOM_SLOT_TAKEN", "ROOM_SLOT_TAKEN"),
        ("  slot_conflict ", "SLOT_CONFLICT"),
        ("error.doctorSpecializationMismatch", "DOCTOR_SPECIALIZATION_MISMATCH"),
        ("Bad Request", "BAD_REQUEST"),
        ("", None),
        (None, None),
    ],
)
def test_normalize_code(raw, normalized):
    """Test Spring-style and free-form codes are normalized before lookup."""
    assert ConflictClassifier.normalize_code(raw) == normalized


@pytest.mark.unit
def test_spring_code_classifies_like_plain_code(classifier):
    """Test error.invalid.status.transition is an illegal transition."""
    conflict = classifier.classify("error.invalid.status.transition", "Cannot transition")
    assert conflict.kind == ConflictKind.ILLEGAL_STATUS_TRANSITION


@pytest.mark.unit
def test_unknown_code_is_unclassified_with_raw_message(classifier):
    """Test unknown codes fall back to UNCLASSIFIED and show the backend message."""
    conflict = classifier.classify("BRAND_NEW_RULE", "Rooms cannot be booked on the moon")

    assert conflict.kind == ConflictKind.UNCLASSIFIED
    assert conflict.category == ConflictCategory.UNCLASSIFIED
    assert conflict.user_message == "Rooms cannot be booked on the moon"


@pytest.mark.unit
def test_message_is_never_parsed(classifier):
    """Test a message mentioning a known code does not change the kind."""
    conflict = classifier.classify("SOMETHING_ELSE", "HOLIDAY_CONFLICT: the date is a holiday")
    assert conflict.kind == ConflictKind.UNCLASSIFIED


@pytest.mark.unit
def test_each_classified_kind_has_a_fixed_message(classifier):
    """Test classified kinds show their fixed message, not the backend one."""
    for kind in ConflictKind:
        if kind == ConflictKind.UNCLASSIFIED:
            assert kind.user_message is None
        else:
            assert kind.user_message

    conflict = classifier.classify("SLOT_CONFLICT", "duplicate key value violates unique constraint")
    assert conflict.user_message == ConflictKind.SLOT_CONFLICT.user_message


@pytest.mark.unit
def test_outside_shift_codes(classifier):
    """Test not-scheduled codes are flagged as outside shift."""
    assert classifier.classify("PARTICIPANT_NOT_SCHEDULED").is_outside_shift
    assert not classifier.classify("ROOM_SLOT_TAKEN").is_outside_shift


@pytest.mark.unit
def test_classify_response(classifier):
    """Test classification of a failed ExternalResponse keeps the status code."""
    response = ExternalResponse.error("HOLIDAY_CONFLICT", "Holiday", status_code=409)

    conflict = classifier.classify_response(response)

    assert conflict.kind == ConflictKind.HOLIDAY_CONFLICT
    assert conflict.status_code == 409
