"""
Byte decoding for uploaded documents.

Rules:
- Detect encoding best-effort via charset-normalizer.
- A UTF-8 BOM is stripped rather than surfacing as U+FEFF in the first field.
- If decoding with the detected encoding fails, fall back to UTF-8.
- If that fails too, decode with replacement characters and report it.
- Line endings are left untouched; the parser handles CR, LF and CRLF itself.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Dict, Optional, Tuple

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _is_utf8(name: str) -> bool:
    return name.lower().replace("-", "_") in ("utf_8", "utf8", "utf_8_sig")


def _decode_or_none(raw: bytes, encoding: str) -> Optional[str]:
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError:
        return None


def decode_bytes(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode raw upload bytes to text.

    Returns the text and a report describing how it was decoded.
    """
    detected = None

    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(_UTF8_BOM) and _is_utf8(decode_used):
        decode_used = "utf-8-sig"

    decode_fallback = False
    fallback = "utf-8-sig" if raw.startswith(_UTF8_BOM) else "utf-8"

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        failed = decode_used
        decode_used = fallback
        decode_fallback = True
        text = None if _is_utf8(failed) else _decode_or_none(raw, fallback)
        if text is None:
            # keep going with U+FFFD in place of undecodable bytes
            text = raw.decode(fallback, errors="replace")
        logger.warning("Decoding with %s failed, used %s instead", failed, decode_used)

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
        "size_bytes": len(raw),
        "sha256": _sha256_hex(raw),
    }
    return text, report
