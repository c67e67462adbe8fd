"""
Fixed envelope rules.

Tag literals, attribute names and record prefixes are case-sensitive and
never configurable; the transition table below is the whole of the
envelope grammar.
"""

from __future__ import annotations

import os
from enum import Enum, IntEnum
from typing import Dict, Tuple

LINE_SEPARATOR = os.linesep
OUTPUT_EXTENSION = ".csv"
OUTPUT_ENCODING = "utf-8"

HEADER_PREFIX = "100"
GROUP_PREFIX = "200"
TRAILER_PREFIX = "900"

FIELD_DELIMITER = ","
IDENTIFIER_FIELD = 1

TRANSACTION_ATTRIBUTES = ("transactionDate", "transactionID")


class LineKind(str, Enum):
    HEADER_OPEN = "<Header>"
    HEADER_CLOSE = "</Header>"
    TRANSACTIONS_OPEN = "<Transactions>"
    TRANSACTION_OPEN = "<Transaction"
    METER_DATA_OPEN = "<MeterDataNotification"
    CSV_DATA_OPEN = "<CSVIntervalData>"
    CSV_DATA_CLOSE = "</CSVIntervalData>"
    METER_DATA_CLOSE = "</MeterDataNotification>"
    TRANSACTION_CLOSE = "</Transaction>"
    TRANSACTIONS_CLOSE = "</Transactions>"
    RECORD = "record"
    OTHER = "other"


class ScanState(IntEnum):
    EXPECT_HEADER = 0
    IN_HEADER = 1
    AFTER_HEADER = 2
    IN_TRANSACTIONS = 3
    IN_TRANSACTION = 4
    IN_METER_DATA = 5
    IN_CSV_DATA = 6
    AFTER_CSV_DATA = 7
    AFTER_METER_DATA = 8
    AFTER_TRANSACTION = 9
    DONE = 10


# (state, line kind) -> next state. Pairs absent from the table are
# format violations; LineKind.OTHER never reaches the table.
TRANSITIONS: Dict[Tuple[ScanState, LineKind], ScanState] = {
    (ScanState.EXPECT_HEADER, LineKind.HEADER_OPEN): ScanState.IN_HEADER,
    (ScanState.IN_HEADER, LineKind.HEADER_CLOSE): ScanState.AFTER_HEADER,
    (ScanState.AFTER_HEADER, LineKind.TRANSACTIONS_OPEN): ScanState.IN_TRANSACTIONS,
    (ScanState.IN_TRANSACTIONS, LineKind.TRANSACTION_OPEN): ScanState.IN_TRANSACTION,
    (ScanState.IN_TRANSACTION, LineKind.METER_DATA_OPEN): ScanState.IN_METER_DATA,
    (ScanState.IN_METER_DATA, LineKind.CSV_DATA_OPEN): ScanState.IN_CSV_DATA,
    (ScanState.IN_CSV_DATA, LineKind.RECORD): ScanState.IN_CSV_DATA,
    (ScanState.IN_CSV_DATA, LineKind.CSV_DATA_CLOSE): ScanState.AFTER_CSV_DATA,
    (ScanState.AFTER_CSV_DATA, LineKind.METER_DATA_CLOSE): ScanState.AFTER_METER_DATA,
    (ScanState.AFTER_METER_DATA, LineKind.TRANSACTION_CLOSE): ScanState.AFTER_TRANSACTION,
    (ScanState.AFTER_TRANSACTION, LineKind.TRANSACTIONS_CLOSE): ScanState.DONE,
}
