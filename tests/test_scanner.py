import pytest

from intervalcsv.errors import FormatError
from intervalcsv.models import ParsedDocument
from intervalcsv.rules import LineKind, ScanState
from intervalcsv.scanner import accumulate, classify, scan_lines, validate_lines


@pytest.mark.parametrize("line, kind", [
    ("<Header>", LineKind.HEADER_OPEN),
    ("</Transactions>", LineKind.TRANSACTIONS_CLOSE),
    ('<Transaction transactionDate="a" transactionID="b">', LineKind.TRANSACTION_OPEN),
    ("<Transaction>", LineKind.TRANSACTION_OPEN),
    ("<MeterDataNotification>", LineKind.METER_DATA_OPEN),
    ('<MeterDataNotification version="r25">', LineKind.METER_DATA_OPEN),
    ("300,20190318,0.4", LineKind.RECORD),
    ("900", LineKind.RECORD),
    ("", LineKind.OTHER),
    ('<?xml version="1.0"?>', LineKind.OTHER),
    ("<header>", LineKind.OTHER),
    ("12,short prefix", LineKind.OTHER),
])
def test_classify(line, kind):
    assert classify(line) is kind


def test_scan_collects_records(scenario_lines):
    doc = scan_lines(scenario_lines)
    assert doc.header == "100,H"
    assert doc.trailer == "900,T"
    assert doc.body == ["200,CUSTA,x", "201,row1", "200,CUSTB,y", "202,row2"]
    assert doc.final_state is ScanState.DONE


def test_scan_trims_indented_lines(envelope):
    lines = ["    " + line + "  " for line in envelope(["100,H", "200,A", "900,T"])]
    doc = scan_lines(lines)
    assert doc.body == ["200,A"]
    assert doc.final_state is ScanState.DONE


def test_csv_data_before_meter_data_fails():
    lines = [
        "<Header>",
        "</Header>",
        "<Transactions>",
        '<Transaction transactionDate="d" transactionID="t">',
        "<CSVIntervalData>",
        "<MeterDataNotification>",
    ]
    with pytest.raises(FormatError) as exc:
        scan_lines(lines)
    assert exc.value.line == "<CSVIntervalData>"
    assert "<CSVIntervalData>" in str(exc.value)


@pytest.mark.parametrize("tag", [
    "<Transaction>",
    "<Transaction transactionID=\"t\" transactionDate=\"d\">",
    "<Transaction transactionDate=\"d\">",
    "<Transaction transactionID=\"t\">",
    "<Transaction transactionDate=\"\" transactionID=\"t\">",
])
def test_transaction_requires_attributes(envelope, tag):
    lines = envelope(["100,H", "200,A", "900,T"])
    lines[4] = tag
    with pytest.raises(FormatError) as exc:
        scan_lines(lines)
    assert exc.value.line == tag


def test_record_outside_data_section_fails(envelope):
    lines = envelope(["100,H", "200,A", "900,T"])
    lines.insert(2, "200,EARLY")
    with pytest.raises(FormatError) as exc:
        scan_lines(lines)
    assert exc.value.line == "200,EARLY"


def test_record_after_data_section_fails(envelope):
    lines = envelope(["100,H", "200,A", "900,T"])
    lines.append("300,late")
    with pytest.raises(FormatError):
        scan_lines(lines)


def test_data_record_before_first_group_fails(envelope):
    with pytest.raises(FormatError) as exc:
        scan_lines(envelope(["100,H", "300,orphan", "200,A", "900,T"]))
    assert exc.value.line == "300,orphan"


def test_repeated_tag_fails(envelope):
    lines = envelope(["100,H", "200,A", "900,T"])
    lines.insert(2, "<Header>")
    with pytest.raises(FormatError):
        scan_lines(lines)


def test_unclosed_envelope_is_accepted(envelope, caplog):
    lines = envelope(["100,H", "200,A", "900,T"])[:-2]
    doc = scan_lines(lines)
    assert doc.final_state is ScanState.AFTER_METER_DATA
    assert doc.body == ["200,A"]
    assert "not closed" in caplog.text


def test_validation_is_repeatable(scenario_lines):
    assert validate_lines(scenario_lines) is ScanState.DONE
    assert validate_lines(scenario_lines) is ScanState.DONE


def test_accumulate_overwrites_header_and_trailer():
    doc = ParsedDocument()
    for record in ["100,first", "100,second", "200,A", "301,x", "900,one", "900,two"]:
        accumulate(doc, record)
    assert doc.header == "100,second"
    assert doc.trailer == "900,two"
    assert doc.body == ["200,A", "301,x"]
