"""
Conversion entry points.

- convert_file: source file on disk -> one CSV per group next to it
- convert_bytes: uploaded bytes -> API response envelope with the CSVs inline

Both scan the whole envelope before the first group is split off, so a
format error never leaves partial output behind.
"""

from __future__ import annotations

import base64
import hashlib
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .files import PathLike, decode_text, read_lines, split_lines, write_lines
from .rules import LINE_SEPARATOR, OUTPUT_ENCODING, ScanState
from .scanner import scan_lines
from .split import iter_outputs

logger = logging.getLogger(__name__)


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def convert_file(
    path: PathLike,
    output_dir: Optional[PathLike] = None,
    separator: str = LINE_SEPARATOR,
) -> List[Path]:
    """
    Convert one envelope file, returning the CSV paths written in order.

    Output goes to the source file's directory unless `output_dir` is
    given. A later group with the same identifier overwrites the earlier
    file.
    """
    source = Path(path)
    document = scan_lines(read_lines(source), source=str(source))
    target_dir = Path(output_dir) if output_dir is not None else source.resolve().parent

    written: List[Path] = []
    for output in iter_outputs(document):
        target = target_dir / output.filename
        if target in written:
            logger.warning("%s written twice, keeping the later group", target.name)
        write_lines(target, output.lines, separator)
        written.append(target)

    logger.info("built %d CSV files from %s", len(written), source.name)
    return written


def convert_bytes(raw: bytes, source: str = "<upload>", separator: str = LINE_SEPARATOR) -> Dict[str, Any]:
    """Returns a dict matching the API's ConvertResponse."""
    text, detected = decode_text(raw)
    document = scan_lines(split_lines(text), source=source)
    records = len(document.body)

    warnings: list[dict] = []
    if document.final_state is not ScanState.DONE:
        warnings.append({
            "issue": "envelope_not_closed",
            "value": document.final_state.name,
            "action": "converted_records_seen",
        })

    outputs: list[dict] = []
    seen: set[str] = set()
    for output in iter_outputs(document):
        if output.filename in seen:
            warnings.append({
                "issue": "duplicate_identifier",
                "value": output.name,
                "action": "later_group_overwrites",
            })
        seen.add(output.filename)

        data = output.render(separator).encode(OUTPUT_ENCODING)
        outputs.append({
            "filename": output.filename,
            "identifier": output.name,
            "rows": output.rows,
            "sha256": _sha256_hex(data),
            "encoding": OUTPUT_ENCODING,
            "content_b64": base64.b64encode(data).decode("ascii"),
        })

    logger.info("built %d CSV files from %s", len(outputs), source)
    return {
        "source": source,
        "outputs": outputs,
        "report": {
            "summary": {
                "outputs": len(outputs),
                "records": records,
                "warnings": len(warnings),
                "complete_envelope": document.final_state is ScanState.DONE,
            },
            "source_encoding": detected,
            "final_state": document.final_state.name,
            "warnings": warnings,
        },
    }
