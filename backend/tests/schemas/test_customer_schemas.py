"""Customer Schemas — the customer normalization pipeline.

Invariants:
    - Required fields missing → one MissingField violation each, all reported together
    - phone must be exactly 10 digits; email is lower-cased and pattern-checked
    - fees and enumerations never fail; bad input falls back to the default
    - dateOfBirth may not be in the future
    - CustomerUpdate yields only the fields the caller sent
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from crm.core.errors import RecordValidationError, ViolationKind
from crm.schemas.customer import CustomerCreate, CustomerUpdate
from crm.schemas.normalize import validate_record


def _payload(**overrides) -> dict:
    payload = {
        "name": "Jane Doe",
        "phone": "1234567890",
        "address": "12 Main Street",
        "serviceCategory": str(uuid4()),
        "serviceCategoryName": "Web Design",
    }
    payload.update(overrides)
    return payload


def _violations(payload: dict, model=CustomerCreate) -> dict:
    with pytest.raises(RecordValidationError) as exc_info:
        validate_record(model, payload)
    return {v.param: v for v in exc_info.value.violations}


# --- CustomerCreate -----------------------------------------------------------

def test_minimal_customer_gets_defaults():
    record = validate_record(CustomerCreate, _payload()).to_record()
    assert record["status"] == "Active"
    assert record["gst_status"] == "Not Paid"
    assert record["delivery_status"] == "Pending"
    assert record["fees"] == 0.0
    assert record["service_sub_category_id"] is None
    assert record["service_sub_category_name"] is None


def test_missing_required_fields_all_reported():
    violations = _violations({})
    assert set(violations) == {
        "name", "phone", "address", "serviceCategory", "serviceCategoryName",
    }
    assert all(v.kind is ViolationKind.MISSING_FIELD for v in violations.values())


def test_short_phone_is_format_invalid():
    violations = _violations(_payload(phone="12345"))
    assert violations["phone"].kind is ViolationKind.FORMAT_INVALID
    assert violations["phone"].msg == "Please enter a valid 10-digit phone number"


def test_email_lowercased():
    record = validate_record(CustomerCreate, _payload(email=" Jane@Example.COM "))
    assert record.email == "jane@example.com"


def test_bad_email_rejected():
    violations = _violations(_payload(email="jane@"))
    assert violations["email"].msg == "Please enter a valid email address"


@pytest.mark.parametrize("fees, expected", [
    ("250.5", 250.5), (100, 100.0), (-5, 0.0), ("abc", 0.0), (None, 0.0),
])
def test_fees_coerced(fees, expected):
    assert validate_record(CustomerCreate, _payload(fees=fees)).fees == expected


def test_unknown_enum_values_fall_back_to_defaults():
    record = validate_record(CustomerCreate, _payload(
        status="Deleted", gstStatus="Maybe", deliveryStatus=7,
    )).to_record()
    assert record["status"] == "Active"
    assert record["gst_status"] == "Not Paid"
    assert record["delivery_status"] == "Pending"


def test_known_enum_values_kept():
    record = validate_record(CustomerCreate, _payload(
        status="Suspended", gstStatus="Pay Later", deliveryStatus="In Progress",
    )).to_record()
    assert record["status"] == "Suspended"
    assert record["gst_status"] == "Pay Later"
    assert record["delivery_status"] == "In Progress"


def test_empty_subcategory_clears_its_name():
    record = validate_record(CustomerCreate, _payload(
        serviceSubCategory="", serviceSubCategoryName="Hosting",
    )).to_record()
    assert record["service_sub_category_id"] is None
    assert record["service_sub_category_name"] is None


def test_malformed_reference_is_format_invalid():
    violations = _violations(_payload(serviceCategory="xyz"))
    assert violations["serviceCategory"].msg == "Invalid service category ID format"


def test_future_birth_date_rejected():
    tomorrow = (datetime.now(timezone.utc) + timedelta(days=1)).isoformat()
    violations = _violations(_payload(dateOfBirth=tomorrow))
    assert violations["dateOfBirth"].msg == "Date of birth cannot be in the future"


def test_dates_parsed_as_utc():
    record = validate_record(CustomerCreate, _payload(
        dateOfBirth="1990-05-17", nextRenewalDate="2030-01-01T00:00:00Z",
    ))
    assert record.date_of_birth == datetime(1990, 5, 17, tzinfo=timezone.utc)
    assert record.next_renewal_date.tzinfo is not None


def test_invalid_date_rejected():
    violations = _violations(_payload(deliveryDate="someday"))
    assert violations["deliveryDate"].msg == "Invalid date"


def test_length_caps():
    violations = _violations(_payload(notes="x" * 2001, zipCode="1" * 21))
    assert set(violations) == {"notes", "zipCode"}


# --- CustomerUpdate -----------------------------------------------------------

def test_update_touches_only_sent_fields():
    update = validate_record(CustomerUpdate, {"notes": "x"})
    assert update.to_changes() == {"notes": "x"}


def test_update_ignores_blank_required_fields():
    update = validate_record(CustomerUpdate, {"name": "  ", "city": " Pune "})
    assert update.to_changes() == {"city": "Pune"}


def test_update_still_validates_sent_fields():
    violations = _violations({"phone": "123"}, model=CustomerUpdate)
    assert violations["phone"].kind is ViolationKind.FORMAT_INVALID


def test_update_reset_statuses_applies_defaults():
    update = validate_record(CustomerUpdate, {"status": "Inactive"})
    assert update.to_changes(reset_statuses=True) == {
        "status": "Inactive",
        "gst_status": "Not Paid",
        "delivery_status": "Pending",
    }


def test_update_clearing_subcategory_clears_name():
    update = validate_record(CustomerUpdate, {"serviceSubCategory": None})
    assert update.to_changes() == {
        "service_sub_category_id": None,
        "service_sub_category_name": None,
    }
