"""End-to-end pass creation: value sets, decode, assemble, sign, package."""

import logging
from typing import Any, Callable, Mapping, Optional

from .archive import AssetBundle, SignedArchive, build_and_sign
from .config import Settings
from .errors import DecodeError, PassError
from .fields import Translate
from .i18n import make_translator
from .passbuilder import assemble_pass
from .payload import decode_payload
from .signing import SigningClient
from .valuesets import ValueSets, fetch_value_sets

logger = logging.getLogger(__name__)


def build_pass(
    data: Mapping[str, Any],
    settings: Settings,
    translate: Optional[Translate] = None,
    assets: Optional[AssetBundle] = None,
    value_sets_source: Optional[Callable[[], ValueSets]] = None,
    sign: Optional[Callable[[bytes], bytes]] = None,
) -> SignedArchive:
    """Run the whole flow for one request. Raises PassError subclasses."""
    if translate is None:
        translate = make_translator(settings.locale)
    if assets is None:
        assets = AssetBundle.from_directory(settings.assets_dir)
    if value_sets_source is None:
        value_sets_source = lambda: fetch_value_sets(settings.value_sets_url, settings.http_timeout)
    if sign is None:
        sign = SigningClient(settings.signer_url, settings.http_timeout)

    # value sets are fetched once per request, never cached
    value_sets = value_sets_source()

    try:
        cert = decode_payload(data, value_sets)
    except DecodeError as e:
        logger.warning(f"[decode] Extracting payload failed ({e.code}): {e}")
        raise

    pass_doc = assemble_pass(cert, settings.identifiers, translate)
    return build_and_sign(pass_doc, assets, sign)


def create_pass(data: Mapping[str, Any], settings: Settings, **kwargs) -> Optional[bytes]:
    """Like build_pass but returns the .pkpass bytes, or None if anything failed."""
    try:
        archive = build_pass(data, settings, **kwargs)
    except PassError as e:
        logger.error(f"[pass] Pass creation failed ({e.code}): {e}")
        return None
    return archive.to_bytes()
