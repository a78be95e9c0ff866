"""
Decoding of DCC claims into typed certificate records.

Key descriptions follow the DCC combined schema:
https://github.com/ehn-dcc-development/ehn-dcc-schema/blob/main/DCC.combined-schema.json
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Union

from .dates import format_date_string
from .errors import InvalidField, MissingField, MissingPayload, UnsupportedCertificateType
from .valuesets import ValueSets

logger = logging.getLogger(__name__)


class CertificateType(Enum):
    VACCINATION = "Vaccination"
    TEST = "Test"
    RECOVERY = "Recovery"


# kind marker in the claims -> certificate type
KIND_MARKERS = {
    "v": CertificateType.VACCINATION,
    "t": CertificateType.TEST,
    "r": CertificateType.RECOVERY,
}


@dataclass(frozen=True)
class Certificate:
    """Fields shared by every certificate kind.

    ``raw`` is the original certificate string as scanned; it is what ends up
    in the pass barcode.
    """

    raw: str
    name: str
    date_of_birth: str
    uvci: str
    certificate_issuer: Any
    country: str

    certificate_type: ClassVar[CertificateType]


@dataclass(frozen=True)
class VaccinationCertificate(Certificate):
    dose_number: str
    total_doses: str
    date_of_vaccination: str
    medical_product_key: str
    vaccine_name: str
    manufacturer: str

    certificate_type = CertificateType.VACCINATION

    @property
    def dose(self) -> str:
        return f"{self.dose_number}/{self.total_doses}"


@dataclass(frozen=True)
class TestCertificate(Certificate):
    test_type: str
    test_result: str
    testing_time: str

    certificate_type = CertificateType.TEST


@dataclass(frozen=True)
class RecoveryCertificate(Certificate):
    positive_tested_date: str
    valid_from_date: str
    valid_until_date: str

    certificate_type = CertificateType.RECOVERY


AnyCertificate = Union[VaccinationCertificate, TestCertificate, RecoveryCertificate]


# -------- Claims helpers --------

def _lookup(mapping: Mapping, key: Union[int, str]) -> Any:
    """Read a claims key that may be an int (CBOR) or a str (JSON)."""
    if key in mapping:
        return mapping[key]
    return mapping.get(str(key))


def _require(entry: Mapping, key: str, path: str) -> Any:
    value = entry.get(key)
    if value is None:
        raise MissingField(f"{path}.{key}")
    return value


def _require_date(entry: Mapping, key: str, path: str = "") -> str:
    """Read a date claim and bring it into instant form."""
    field = f"{path}.{key}" if path else key
    value = entry.get(key)
    if value is None:
        raise MissingField(field)
    if not isinstance(value, str):
        raise InvalidField(field, value)
    return format_date_string(value)


def extract_hcert(decoded: Mapping) -> Dict[str, Any]:
    """Return the DCC claims found under ``-260/1``."""
    container = _lookup(decoded, -260)
    hcert = _lookup(container, 1) if isinstance(container, Mapping) else None
    if not isinstance(hcert, Mapping):
        raise MissingField("-260/1")
    return dict(hcert)


def _certificate_kind(hcert: Mapping) -> str:
    present = [marker for marker in KIND_MARKERS if marker in hcert]
    if not present:
        raise UnsupportedCertificateType("This certificate type is not supported")
    if len(present) > 1:
        raise UnsupportedCertificateType(
            f"Certificate carries more than one kind: {', '.join(present)}"
        )
    return present[0]


# -------- Decoder --------

def decode_payload(body: Mapping, value_sets: ValueSets) -> AnyCertificate:
    """Validate ``{"raw": str, "decoded": claims}`` and build a certificate.

    Raises a DecodeError subclass on the first problem found; nothing is
    returned for a certificate that does not fully validate.
    """
    raw = body.get("raw")
    decoded = body.get("decoded")
    if not isinstance(raw, str) or not raw:
        raise MissingPayload("No raw payload")
    if not isinstance(decoded, Mapping):
        raise MissingPayload("No decoded payload")

    hcert = extract_hcert(decoded)

    nam = hcert.get("nam")
    if not isinstance(nam, Mapping):
        raise MissingField("nam")
    first_name = _require(nam, "gn", "nam")
    last_name = _require(nam, "fnt", "nam")

    date_of_birth = _require_date(hcert, "dob")

    marker = _certificate_kind(hcert)
    entries = hcert[marker]
    if not isinstance(entries, list) or not entries or not isinstance(entries[0], Mapping):
        raise MissingField(f"{marker}[0]")
    entry = entries[0]

    common = {
        "raw": raw,
        "name": f"{last_name}, {first_name}",
        "date_of_birth": date_of_birth,
        "uvci": _require(entry, "ci", marker),
        "certificate_issuer": entry.get("is"),
        "country": value_sets.display(value_sets.country_codes, "country", entry.get("co")),
    }

    kind = KIND_MARKERS[marker]
    if kind is CertificateType.VACCINATION:
        cert = _parse_vaccination(entry, value_sets, common)
    elif kind is CertificateType.TEST:
        cert = _parse_test(entry, value_sets, common)
    else:
        cert = _parse_recovery(entry, common)

    logger.info(f"[decode] Decoded {kind.value} certificate {cert.uvci}")
    return cert


def _parse_vaccination(v: Mapping, value_sets: ValueSets, common: Dict[str, Any]) -> VaccinationCertificate:
    medical_product_key = v.get("mp")
    vaccine_name = value_sets.display(value_sets.medical_products, "medical product", medical_product_key)
    manufacturer = value_sets.display(value_sets.manufacturers, "manufacturer", v.get("ma"))

    return VaccinationCertificate(
        dose_number=str(v.get("dn")),
        total_doses=str(v.get("sd")),
        date_of_vaccination=_require_date(v, "dt", "v"),
        medical_product_key=medical_product_key,
        vaccine_name=vaccine_name,
        manufacturer=manufacturer,
        **common,
    )


def _parse_test(t: Mapping, value_sets: ValueSets, common: Dict[str, Any]) -> TestCertificate:
    test_type = value_sets.display(value_sets.test_types, "test type", t.get("tt"))
    test_result = value_sets.display(value_sets.test_results, "test result", t.get("tr"))

    return TestCertificate(
        test_type=test_type,
        test_result=test_result,
        testing_time=_require_date(t, "sc", "t"),
        **common,
    )


def _parse_recovery(r: Mapping, common: Dict[str, Any]) -> RecoveryCertificate:
    return RecoveryCertificate(
        positive_tested_date=_require_date(r, "fr", "r"),
        valid_from_date=_require_date(r, "df", "r"),
        valid_until_date=_require_date(r, "du", "r"),
        **common,
    )
