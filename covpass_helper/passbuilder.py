"""Assembly of the pass.json document."""

import logging
import secrets
import string
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .dates import is_apple_parsable
from .fields import Translate, secondary_and_auxiliary_fields, vaccination_expiration
from .payload import AnyCertificate, CertificateType

logger = logging.getLogger(__name__)

PASS_NAME = "COVID Pass"
FORMAT_VERSION = 1

BACKGROUND_COLOR = "rgb(246,244,240)"
LABEL_COLOR = "rgb(77,149,84)"
FOREGROUND_COLOR = "rgb(0,0,0)"

SERIAL_ALPHABET = string.ascii_letters + string.digits


@dataclass(frozen=True)
class PassIdentifiers:
    pass_type_identifier: str
    team_identifier: str


def random_id(length: int) -> str:
    return "".join(secrets.choice(SERIAL_ALPHABET) for _ in range(length))


def expiration_date(cert: AnyCertificate) -> Optional[str]:
    """Point in time after which the wallet greys the pass out.

    Vaccinations expire a fixed window after the vaccination date, recoveries
    at their "valid until" date. Tests carry no expiration.
    """
    if cert.certificate_type is CertificateType.VACCINATION:
        exp = vaccination_expiration(cert)
    elif cert.certificate_type is CertificateType.RECOVERY:
        exp = cert.valid_until_date
    else:
        return None
    return exp if is_apple_parsable(exp) else None


def assemble_pass(
    cert: AnyCertificate,
    identifiers: PassIdentifiers,
    translate: Translate,
    serial_number: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the pass document for ``cert``.

    The barcode carries ``cert.raw`` verbatim so that verifier apps can check
    the issuer's signature on the original certificate.
    """
    qr_code = {
        "message": cert.raw,
        "format": "PKBarcodeFormatQR",
        "messageEncoding": "utf-8",
    }

    if serial_number is None:
        serial_number = cert.uvci + random_id(8)

    kind_fields = secondary_and_auxiliary_fields(cert, translate)
    kind_key = cert.certificate_type.value.lower()

    pass_doc = {
        "passTypeIdentifier": identifiers.pass_type_identifier,
        "teamIdentifier": identifiers.team_identifier,
        "sharingProhibited": True,
        "voided": False,
        "formatVersion": FORMAT_VERSION,
        "logoText": PASS_NAME,
        "organizationName": PASS_NAME,
        "description": PASS_NAME,
        "labelColor": LABEL_COLOR,
        "foregroundColor": FOREGROUND_COLOR,
        "backgroundColor": BACKGROUND_COLOR,
        "serialNumber": serial_number,
        "barcodes": [qr_code],
        "barcode": qr_code,
        "generic": {
            "headerFields": [
                {
                    "key": "type",
                    "label": translate("pass.certificateType.label"),
                    "value": translate(f"pass.certificateType.{kind_key}"),
                },
            ],
            "primaryFields": [
                {"key": "name", "label": translate("pass.name"), "value": cert.name},
            ],
            "secondaryFields": kind_fields["secondaryFields"],
            "auxiliaryFields": kind_fields["auxiliaryFields"],
            "backFields": [
                {"key": "uvci", "label": translate("pass.uniqueCertificateIdentifier"), "value": cert.uvci},
                {"key": "issuer", "label": translate("pass.certificateIssuer"), "value": cert.certificate_issuer},
                {"key": "country", "label": translate("pass.country"), "value": cert.country},
                {
                    "key": "disclaimer",
                    "label": translate("pass.disclaimer.label"),
                    "value": translate("pass.disclaimer.value"),
                },
                {
                    "key": "credits",
                    "label": translate("pass.credits.label"),
                    "value": translate("pass.credits.value"),
                },
            ],
        },
    }

    exp = expiration_date(cert)
    if exp is not None:
        pass_doc["expirationDate"] = exp
    else:
        logger.info(f"[pass] No expiration date for {cert.certificate_type.value} certificate")

    return pass_doc
