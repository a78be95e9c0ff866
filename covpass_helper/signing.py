"""Client for the remote manifest signer."""

import logging

import requests

from .errors import SigningError

logger = logging.getLogger(__name__)

SIGN_PATH = "/api/sign"


class SigningClient:
    """POSTs manifest bytes to ``<base_url>/api/sign`` and returns the signature."""

    def __init__(self, base_url: str, timeout: float = 25):
        self.url = base_url.rstrip("/") + SIGN_PATH
        self.timeout = timeout

    def sign(self, manifest: bytes) -> bytes:
        headers = {
            "Accept": "application/octet-stream",
            "Content-Type": "application/json",
        }
        logger.info(f"[sign] Requesting signature for manifest of {len(manifest)} bytes from {self.url}")
        try:
            response = requests.post(self.url, data=manifest, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"[sign] Signer unreachable: {e}")
            raise SigningError(f"Signer unreachable: {e}") from e

        if response.status_code != 200:
            logger.error(f"[sign] Signer answered HTTP {response.status_code}: {response.text[:200]}")
            raise SigningError(f"Signer answered HTTP {response.status_code}", status_code=response.status_code)

        return response.content

    __call__ = sign
