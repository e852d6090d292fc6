"""Manifest: persisted cache of repository paths relative to a root."""

from plz.manifest.codec import (
    decode,
    decode_json,
    decode_lines,
    encode,
    encode_json,
    encode_lines,
    format_for,
)
from plz.manifest.errors import ManifestError
from plz.manifest.snapshot import ManifestSnapshot, is_valid_key, relative_key
from plz.manifest.store import Manifest, ManifestPaths, remove_document

__all__ = [
    # codec
    "decode",
    "decode_json",
    "decode_lines",
    "encode",
    "encode_json",
    "encode_lines",
    "format_for",
    # errors
    "ManifestError",
    # snapshot
    "ManifestSnapshot",
    "is_valid_key",
    "relative_key",
    # store
    "Manifest",
    "ManifestPaths",
    "remove_document",
]
