"""Error taxonomy for pass creation."""

from typing import Any, Optional


class PassError(Exception):
    """Base class for every failure that prevents a pass from being produced."""

    code = "pass_error"


# -------- Remote failures --------

class NetworkError(PassError):
    """Value set source or signer unreachable, or answered with a non-OK status."""

    code = "network_error"


class SigningError(NetworkError):
    code = "signing_failed"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# -------- Decode failures --------

class DecodeError(PassError, ValueError):
    code = "decode_error"


class MissingPayload(DecodeError):
    code = "missing_payload"


class MissingField(DecodeError):
    code = "missing_field"

    def __init__(self, field: str):
        super().__init__(f"Failed to read {field}")
        self.field = field


class InvalidField(DecodeError):
    code = "invalid_field"

    def __init__(self, field: str, value: Any):
        super().__init__(f"Invalid value for {field}: {value!r}")
        self.field = field
        self.value = value


class UnsupportedCertificateType(DecodeError):
    code = "unsupported_certificate_type"


class InvalidCode(DecodeError):
    code = "invalid_code"

    def __init__(self, category: str, value: Any):
        super().__init__(f"Invalid {category} code: {value!r}")
        self.category = category
        self.value = value
