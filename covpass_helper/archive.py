"""
Packaging of a pass document into a signed .pkpass archive.

The archive is a zip holding pass.json, the four images, manifest.json (SHA-1
of every other entry) and a detached signature over the manifest bytes.
"""

import hashlib
import io
import json
import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

PASS_JSON = "pass.json"
MANIFEST_JSON = "manifest.json"
SIGNATURE = "signature"

ASSET_NAMES = ("icon.png", "icon@2x.png", "logo.png", "logo@2x.png")
DEFAULT_ASSETS_DIR = Path(__file__).parent / "img"

Entry = Tuple[str, bytes]


@dataclass(frozen=True)
class AssetBundle:
    icon: bytes
    icon2x: bytes
    logo: bytes
    logo2x: bytes

    def entries(self) -> List[Entry]:
        return list(zip(ASSET_NAMES, (self.icon, self.icon2x, self.logo, self.logo2x)))

    @classmethod
    def from_directory(cls, directory: Optional[str] = None) -> "AssetBundle":
        """Load the four images from ``directory`` (defaults to the shipped ones)."""
        base = Path(directory) if directory else DEFAULT_ASSETS_DIR
        icon, icon2x, logo, logo2x = ((base / name).read_bytes() for name in ASSET_NAMES)
        return cls(icon=icon, icon2x=icon2x, logo=logo, logo2x=logo2x)


@dataclass
class SignedArchive:
    entries: List[Entry] = field(default_factory=list)

    def names(self) -> List[str]:
        return [path for path, _ in self.entries]

    def get(self, path: str) -> Optional[bytes]:
        for name, data in self.entries:
            if name == path:
                return data
        return None

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
            for path, data in self.entries:
                zf.writestr(path, data)
        return buf.getvalue()


def content_hash(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def serialize_pass(pass_doc: Dict[str, Any]) -> bytes:
    return json.dumps(pass_doc, ensure_ascii=False).encode("utf-8")


def build_entries(pass_doc: Dict[str, Any], assets: AssetBundle) -> List[Entry]:
    return [(PASS_JSON, serialize_pass(pass_doc))] + assets.entries()


def build_manifest(entries: List[Entry]) -> Dict[str, str]:
    return {path: content_hash(data) for path, data in entries}


def serialize_manifest(manifest: Dict[str, str]) -> bytes:
    return json.dumps(manifest, separators=(",", ":")).encode("utf-8")


def build_and_sign(
    pass_doc: Dict[str, Any],
    assets: AssetBundle,
    sign: Callable[[bytes], bytes],
) -> SignedArchive:
    """Hash every entry, have the manifest signed and return the full archive.

    ``sign`` receives exactly the bytes stored as manifest.json. Any exception
    it raises propagates and no archive is built.
    """
    entries = build_entries(pass_doc, assets)
    manifest_bytes = serialize_manifest(build_manifest(entries))
    entries.append((MANIFEST_JSON, manifest_bytes))

    signature = sign(manifest_bytes)
    logger.info(f"[pass] Manifest signed, signature {len(signature)} bytes")

    entries.append((SIGNATURE, signature))
    return SignedArchive(entries=entries)
