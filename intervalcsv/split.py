"""
Group splitting.

A ParsedDocument body is a run of groups, each opened by a 200 record.
Every extraction takes the leading group, frames it with the shared header
and trailer records, and leaves the rest of the body for the next call.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Tuple

from .errors import ContentError
from .models import CsvOutput, ParsedDocument
from .rules import FIELD_DELIMITER, GROUP_PREFIX, IDENTIFIER_FIELD

logger = logging.getLogger(__name__)


def group_identifier(group_line: str) -> str:
    if not group_line.startswith(GROUP_PREFIX):
        raise ContentError(group_line)
    fields = group_line.split(FIELD_DELIMITER)
    if len(fields) <= IDENTIFIER_FIELD or not fields[IDENTIFIER_FIELD]:
        raise ContentError(group_line, "has no customer identifier field")
    return fields[IDENTIFIER_FIELD]


def _build_next(document: ParsedDocument) -> Tuple[CsvOutput, List[str]]:
    body = document.body
    group_line = body[0]
    name = group_identifier(group_line)

    end = 1
    while end < len(body) and not body[end].startswith(GROUP_PREFIX):
        end += 1

    lines = [document.header, group_line, *body[1:end], document.trailer]
    return CsvOutput(name=name, lines=lines), body[end:]


def extract_next(document: ParsedDocument, emit: Callable[[CsvOutput], None]) -> bool:
    """
    Hand the leading group of `document` to `emit`.

    Returns False, touching nothing, once the body is empty. The body is
    only cut after `emit` returns, so a failing writer leaves the group in
    place.
    """
    if not document.body:
        return False

    output, remainder = _build_next(document)
    emit(output)
    document.body = remainder
    return True


def iter_outputs(document: ParsedDocument) -> Iterator[CsvOutput]:
    """Yield one CsvOutput per group until the body is exhausted."""
    while document.body:
        output, remainder = _build_next(document)
        logger.debug("group %s: %d data rows", output.name, output.rows)
        yield output
        document.body = remainder

