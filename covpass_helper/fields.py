"""Per-kind display fields of the generic pass layout."""

from typing import Any, Callable, Dict, List

from .dates import add_days
from .payload import (
    AnyCertificate,
    CertificateType,
    RecoveryCertificate,
    TestCertificate,
    VaccinationCertificate,
)

Translate = Callable[[str], str]
Field = Dict[str, Any]

ALIGN_LEFT = "PKTextAlignmentLeft"
ALIGN_CENTER = "PKTextAlignmentCenter"
ALIGN_RIGHT = "PKTextAlignmentRight"

# Keys with a fixed alignment. Every other key is left aligned unless the
# caller asks for right alignment.
ALIGNMENT_BY_KEY = {
    "exp": ALIGN_RIGHT,
    "dov": ALIGN_CENTER,
}

VACCINATION_VALIDITY_DAYS = 270


def text_alignment(key: str, align_right: bool = False) -> str:
    if key in ALIGNMENT_BY_KEY:
        return ALIGNMENT_BY_KEY[key]
    return ALIGN_RIGHT if align_right else ALIGN_LEFT


def string_field(key: str, value: Any, label_key: str, translate: Translate, align_right: bool = False) -> Field:
    return {
        "key": key,
        "value": value,
        "label": translate(label_key),
        "textAlignment": text_alignment(key, align_right),
    }


def date_field(key: str, value: Any, label_key: str, translate: Translate, align_right: bool = False) -> Field:
    field = string_field(key, value, label_key, translate, align_right)
    field["dateStyle"] = "PKDateStyleMedium"
    field["timeStyle"] = "PKDateStyleNone"
    field["ignoresTimeZone"] = True
    return field


def vaccination_expiration(cert: VaccinationCertificate) -> str:
    """Vaccination date plus the validity window, or "" for partial dates."""
    return add_days(cert.date_of_vaccination, VACCINATION_VALIDITY_DAYS) or ""


def _vaccination_fields(cert: VaccinationCertificate, translate: Translate) -> Dict[str, List[Field]]:
    return {
        "secondaryFields": [
            string_field("dose", cert.dose, "pass.dose", translate),
            date_field("dov", cert.date_of_vaccination, "pass.dateOfVaccination", translate),
            date_field("exp", vaccination_expiration(cert), "pass.validUntil", translate, align_right=True),
        ],
        "auxiliaryFields": [
            string_field("vaccine", cert.vaccine_name, "pass.vaccine", translate),
            date_field("dob", cert.date_of_birth, "pass.dateOfBirth", translate, align_right=True),
        ],
    }


def _test_fields(cert: TestCertificate, translate: Translate) -> Dict[str, List[Field]]:
    return {
        "secondaryFields": [
            string_field("testType", cert.test_type, "pass.testType", translate),
            string_field("testResult", cert.test_result, "pass.testResult", translate, align_right=True),
        ],
        "auxiliaryFields": [
            date_field("testingTime", cert.testing_time, "pass.testingTime", translate),
            date_field("dob", cert.date_of_birth, "pass.dateOfBirth", translate, align_right=True),
        ],
    }


def _recovery_fields(cert: RecoveryCertificate, translate: Translate) -> Dict[str, List[Field]]:
    return {
        "secondaryFields": [
            date_field("validFrom", cert.valid_from_date, "pass.validFrom", translate),
            date_field("validUntil", cert.valid_until_date, "pass.validUntil", translate, align_right=True),
        ],
        "auxiliaryFields": [
            date_field("firstPositiveTested", cert.positive_tested_date, "pass.positiveTested", translate),
            date_field("dob", cert.date_of_birth, "pass.dateOfBirth", translate, align_right=True),
        ],
    }


_FIELD_BUILDERS = {
    CertificateType.VACCINATION: _vaccination_fields,
    CertificateType.TEST: _test_fields,
    CertificateType.RECOVERY: _recovery_fields,
}


def secondary_and_auxiliary_fields(cert: AnyCertificate, translate: Translate) -> Dict[str, List[Field]]:
    """Return ``{"secondaryFields": [...], "auxiliaryFields": [...]}`` for ``cert``."""
    # a certificate without one of the three types is a bug, let KeyError surface
    return _FIELD_BUILDERS[cert.certificate_type](cert, translate)
