from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from .rules import LINE_SEPARATOR, OUTPUT_EXTENSION, ScanState


class ParsedDocument(BaseModel):
    """
    Records accumulated from one envelope.

    `body` holds every group-start and data record in file order. It only
    ever shrinks after the scan: each extraction cuts the leading group off.
    """
    source: Optional[str] = None
    header: str = ""
    trailer: str = ""
    body: List[str] = Field(default_factory=list)
    final_state: ScanState = ScanState.EXPECT_HEADER


class CsvOutput(BaseModel):
    name: str
    lines: List[str]

    @property
    def filename(self) -> str:
        return f"{self.name}{OUTPUT_EXTENSION}"

    @property
    def rows(self) -> int:
        # data rows only, without the header/group/trailer frame
        return max(len(self.lines) - 3, 0)

    def render(self, separator: str = LINE_SEPARATOR) -> str:
        return "".join(line + separator for line in self.lines)


class ConvertedCsv(BaseModel):
    filename: str
    identifier: str
    rows: int
    sha256: str
    encoding: str = Field(default="utf-8")
    content_b64: str


class ReportSummary(BaseModel):
    outputs: int = 0
    records: int = 0
    warnings: int = 0
    complete_envelope: bool = True


class ReportItem(BaseModel):
    issue: str
    value: Optional[str] = None
    action: str


class ConversionReport(BaseModel):
    summary: ReportSummary
    source_encoding: Optional[str] = None
    final_state: str
    warnings: List[ReportItem] = Field(default_factory=list)


class ConvertResponse(BaseModel):
    source: str
    outputs: List[ConvertedCsv] = Field(default_factory=list)
    report: ConversionReport


class HealthResponse(BaseModel):
    ok: bool = True
