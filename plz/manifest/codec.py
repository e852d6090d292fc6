"""Manifest document encodings.

Structured (JSON)::

    {
      "root_path": "/home/me/src",
      "repositories": ["a", "b/c"]
    }

Line-based: one absolute repository path per line, sorted. A line-based
document carries no root of its own, so decoding binds it to the root the
caller asks for and ignores lines outside it.
"""

from __future__ import annotations

import json
from pathlib import Path

from plz.core.config import ManifestFormat
from plz.core.result import Err, Ok, Result
from plz.core.structured import as_str_dict, as_str_list, get_str
from plz.manifest.errors import ManifestError
from plz.manifest.snapshot import ManifestSnapshot, is_valid_key, relative_key

__all__ = [
    "decode",
    "decode_json",
    "decode_lines",
    "encode",
    "encode_json",
    "encode_lines",
    "format_for",
]

LINES_SUFFIX = ".txt"


def format_for(document: Path) -> ManifestFormat:
    """Pick the encoding from the document file name."""
    if document.suffix.lower() == LINES_SUFFIX:
        return ManifestFormat.LINES
    return ManifestFormat.JSON


def encode_json(snapshot: ManifestSnapshot) -> str:
    data = {
        "root_path": str(snapshot.root),
        "repositories": snapshot.sorted_keys(),
    }
    return json.dumps(data, indent=2) + "\n"


def decode_json(text: str) -> Result[ManifestSnapshot, ManifestError]:
    """Parse a structured document.

    Every entry must be a clean relative path; one bad entry rejects the
    whole document so an edited file can never smuggle in ``../`` paths.
    """
    try:
        data_obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ManifestError(kind="invalid", message=f"Invalid JSON: {e}"))
    except RecursionError:
        return Err(ManifestError(kind="invalid", message="Invalid JSON: nested too deeply"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ManifestError(kind="invalid", message="Manifest root must be an object"))

    root_str = get_str(data, "root_path")
    if root_str is None or not Path(root_str).is_absolute():
        return Err(ManifestError(kind="invalid", message="root_path must be an absolute path"))

    keys = as_str_list(data.get("repositories"))
    if keys is None:
        return Err(ManifestError(kind="invalid", message="repositories must be a list of strings"))

    bad = [k for k in keys if not is_valid_key(k)]
    if bad:
        return Err(ManifestError(kind="invalid", message=f"Invalid repository path: {bad[0]!r}"))

    return Ok(ManifestSnapshot(root=Path(root_str), repositories=frozenset(keys)))


def encode_lines(snapshot: ManifestSnapshot) -> str:
    return "".join(f"{snapshot.root / key}\n" for key in snapshot.sorted_keys())


def decode_lines(text: str, root: Path) -> Result[ManifestSnapshot, ManifestError]:
    keys: set[str] = set()
    for line in text.splitlines():
        s = line.strip()
        if not s:
            continue
        path = Path(s)
        if not path.is_absolute():
            return Err(ManifestError(kind="invalid", message=f"Not an absolute path: {s!r}"))
        key = relative_key(root, path)
        if key is not None:
            keys.add(key)

    return Ok(ManifestSnapshot(root=root, repositories=frozenset(keys)))


def encode(snapshot: ManifestSnapshot, fmt: ManifestFormat) -> str:
    match fmt:
        case ManifestFormat.JSON:
            return encode_json(snapshot)
        case ManifestFormat.LINES:
            return encode_lines(snapshot)


def decode(text: str, fmt: ManifestFormat, root: Path) -> Result[ManifestSnapshot, ManifestError]:
    match fmt:
        case ManifestFormat.JSON:
            return decode_json(text)
        case ManifestFormat.LINES:
            return decode_lines(text, root)
