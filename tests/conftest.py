from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / "data"

OPENING = [
    '<?xml version="1.0" encoding="UTF-8"?>',
    "<Header>",
    "</Header>",
    "<Transactions>",
    '<Transaction transactionDate="2019-03-18" transactionID="TXN-1">',
    '<MeterDataNotification version="r25">',
    "<CSVIntervalData>",
]

CLOSING = [
    "</CSVIntervalData>",
    "</MeterDataNotification>",
    "</Transaction>",
    "</Transactions>",
]

SCENARIO_RECORDS = [
    "100,H",
    "200,CUSTA,x",
    "201,row1",
    "200,CUSTB,y",
    "202,row2",
    "900,T",
]


def build_envelope(records):
    return OPENING + list(records) + CLOSING


@pytest.fixture
def envelope():
    return build_envelope


@pytest.fixture
def scenario_lines():
    return build_envelope(SCENARIO_RECORDS)


@pytest.fixture
def testfile(tmp_path):
    target = tmp_path / "testfile.xml"
    target.write_bytes((DATA_DIR / "testfile.xml").read_bytes())
    return target
