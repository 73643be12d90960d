"""Data-quality reporting for the ledger tools.

The ledger tools never raise on bad records. They substitute a neutral value and
record what they found here, so callers can surface or log the problem.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple

from logger import get_logger

logger = get_logger("quality")

MISSING_DATE = "missing_date"
INVALID_DATE = "invalid_date"
INVALID_AMOUNT = "invalid_amount"
NEGATIVE_AMOUNT = "negative_amount"
UNKNOWN_TYPE = "unknown_type"
INVALID_INITIAL_BALANCE = "invalid_initial_balance"


@dataclass(frozen=True)
class DataQualityIssue:
    """One problem found on one record.

    Attributes:
        kind: Issue kind, e.g. "invalid_amount".
        record_id: Id of the transaction or account, if it has one.
        detail: Human readable description including the offending value.
    """

    kind: str
    record_id: Optional[str]
    detail: str


class DataQualityReport:
    """Collects issues across one or more tool calls.

    The same (kind, record) pair is recorded once, however many tools trip over
    it while computing a summary.
    """

    def __init__(self):
        self.issues: List[DataQualityIssue] = []
        self._seen: Set[Tuple[str, Optional[str]]] = set()

    def add(self, kind: str, record: Any, detail: str) -> None:
        record_id = getattr(record, "id", None)
        if (kind, record_id) in self._seen:
            return
        self._seen.add((kind, record_id))
        self.issues.append(DataQualityIssue(kind, record_id, detail))
        logger.warning(f"Data quality: {kind} on {record_id or 'record'} ({detail})")

    def count(self, kind: Optional[str] = None) -> int:
        if kind is None:
            return len(self.issues)
        return sum(1 for issue in self.issues if issue.kind == kind)

    def summary(self) -> Dict[str, int]:
        return dict(Counter(issue.kind for issue in self.issues))


def record_issue(
    report: Optional[DataQualityReport], kind: str, record: Any, detail: str
) -> None:
    """Record an issue on ``report``, or log it at debug level without one."""
    if report is not None:
        report.add(kind, record, detail)
    else:
        logger.debug(f"Data quality: {kind} on {getattr(record, 'id', None)} ({detail})")
