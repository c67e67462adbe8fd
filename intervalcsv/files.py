"""
Line source and line sink.

Input bytes are decoded best-effort via charset-normalizer (a UTF-8 BOM is
dropped); output files are always written as UTF-8 with the separator
untouched by newline translation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from charset_normalizer import from_bytes

from .errors import InputNotFound, WriteError
from .rules import LINE_SEPARATOR, OUTPUT_ENCODING

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def decode_text(raw: bytes) -> Tuple[str, Optional[str]]:
    """
    Decode input bytes, returning the text and the detected encoding.

    Falls back to UTF-8, then to the best guess with replacement characters,
    so a conversion never fails on decoding alone.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and (decode_used.lower().replace("-", "_") in ("utf_8", "utf8")):
        decode_used = "utf-8-sig"

    try:
        return raw.decode(decode_used), detected
    except (UnicodeDecodeError, LookupError):
        pass

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = raw.decode("utf-8", errors="replace")
    logger.warning("could not decode input as %s, fell back to utf-8", decode_used)
    return text, detected


def split_lines(text: str) -> List[str]:
    # only CR and LF end a line
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def read_lines(path: PathLike) -> Iterator[str]:
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise InputNotFound(str(path)) from exc

    text, _ = decode_text(raw)
    return iter(split_lines(text))


def write_lines(path: PathLike, lines: Iterable[str], separator: str = LINE_SEPARATOR) -> None:
    path = Path(path)
    try:
        with path.open("w", encoding=OUTPUT_ENCODING, newline="") as fh:
            for line in lines:
                fh.write(line)
                fh.write(separator)
    except OSError as exc:
        raise WriteError(str(path)) from exc
