"""Turn decoded EU Digital COVID Certificates into signed Apple Wallet passes."""

from .errors import (
    DecodeError,
    InvalidCode,
    InvalidField,
    MissingField,
    MissingPayload,
    NetworkError,
    PassError,
    SigningError,
    UnsupportedCertificateType,
)
from .service import build_pass, create_pass

__version__ = "1.0.0"

__all__ = [
    "DecodeError",
    "InvalidCode",
    "InvalidField",
    "MissingField",
    "MissingPayload",
    "NetworkError",
    "PassError",
    "SigningError",
    "UnsupportedCertificateType",
    "build_pass",
    "create_pass",
]
