from covpass_helper.fields import (
    ALIGN_CENTER,
    ALIGN_LEFT,
    ALIGN_RIGHT,
    date_field,
    secondary_and_auxiliary_fields,
    string_field,
    text_alignment,
)
from covpass_helper.payload import decode_payload


def by_key(fields):
    return {f["key"]: f for f in fields}


def test_alignment_policy():
    assert text_alignment("exp") == ALIGN_RIGHT
    assert text_alignment("dov", align_right=True) == ALIGN_CENTER
    assert text_alignment("dose") == ALIGN_LEFT
    assert text_alignment("dob", align_right=True) == ALIGN_RIGHT


def test_date_field_carries_display_style(translate):
    field = date_field("dob", "1964-08-12T12:00:00Z", "pass.dateOfBirth", translate)

    assert field["label"] == "pass.dateOfBirth"
    assert field["dateStyle"] == "PKDateStyleMedium"
    assert field["timeStyle"] == "PKDateStyleNone"
    assert field["ignoresTimeZone"] is True


def test_string_field_has_no_date_style(translate):
    field = string_field("dose", "1/2", "pass.dose", translate)

    assert "dateStyle" not in field
    assert field["textAlignment"] == ALIGN_LEFT


def test_vaccination_fields(vaccination, value_sets, translate):
    fields = secondary_and_auxiliary_fields(decode_payload(vaccination, value_sets), translate)

    secondary = fields["secondaryFields"]
    assert [f["key"] for f in secondary] == ["dose", "dov", "exp"]
    assert secondary[0]["value"] == "2/2"
    assert secondary[1]["textAlignment"] == ALIGN_CENTER
    assert secondary[2]["value"] == "2022-01-26T12:00:00Z"
    assert secondary[2]["textAlignment"] == ALIGN_RIGHT

    auxiliary = by_key(fields["auxiliaryFields"])
    assert auxiliary["vaccine"]["value"] == "Comirnaty"
    assert auxiliary["dob"]["textAlignment"] == ALIGN_RIGHT


def test_test_fields(covid_test, value_sets, translate):
    fields = secondary_and_auxiliary_fields(decode_payload(covid_test, value_sets), translate)

    secondary = by_key(fields["secondaryFields"])
    assert secondary["testResult"]["value"] == "Not detected"
    assert secondary["testResult"]["textAlignment"] == ALIGN_RIGHT
    assert secondary["testType"]["textAlignment"] == ALIGN_LEFT
    assert [f["key"] for f in fields["auxiliaryFields"]] == ["testingTime", "dob"]


def test_recovery_fields(recovery, value_sets, translate):
    fields = secondary_and_auxiliary_fields(decode_payload(recovery, value_sets), translate)

    assert [f["key"] for f in fields["secondaryFields"]] == ["validFrom", "validUntil"]
    auxiliary = by_key(fields["auxiliaryFields"])
    assert auxiliary["firstPositiveTested"]["label"] == "pass.positiveTested"
    assert auxiliary["firstPositiveTested"]["value"] == "2021-01-10T12:00:00Z"


def test_labels_go_through_translate(vaccination, value_sets):
    fields = secondary_and_auxiliary_fields(decode_payload(vaccination, value_sets), str.upper)

    assert fields["secondaryFields"][0]["label"] == "PASS.DOSE"
