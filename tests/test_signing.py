from unittest.mock import MagicMock, patch

import pytest
import requests

from covpass_helper.errors import NetworkError, SigningError
from covpass_helper.signing import SigningClient


def response(status, content=b""):
    r = MagicMock()
    r.status_code = status
    r.content = content
    r.text = content.decode("latin-1")
    return r


def test_posts_manifest_and_returns_signature():
    client = SigningClient("https://signer.example.com/", timeout=5)

    with patch("covpass_helper.signing.requests.post", return_value=response(200, b"sig")) as post:
        assert client.sign(b'{"pass.json":"ab"}') == b"sig"

    post.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == "https://signer.example.com/api/sign"
    assert kwargs["data"] == b'{"pass.json":"ab"}'
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["headers"]["Accept"] == "application/octet-stream"
    assert kwargs["timeout"] == 5


def test_non_200_is_a_signing_error():
    client = SigningClient("https://signer.example.com")

    with patch("covpass_helper.signing.requests.post", return_value=response(503, b"busy")):
        with pytest.raises(SigningError) as exc:
            client.sign(b"{}")
    assert exc.value.status_code == 503


def test_connection_failure_is_a_network_error():
    client = SigningClient("https://signer.example.com")

    with patch("covpass_helper.signing.requests.post", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(NetworkError):
            client(b"{}")
