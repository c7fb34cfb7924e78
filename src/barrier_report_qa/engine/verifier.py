"""
Report Filter Verifier - Check scraped grid rows against filter criteria.

Criteria keys are logical column names ("typeOfUser", "key_population",
"age", "date"). Each key is read as words and resolved to the first header
containing them, case-insensitively; keys with no matching column are
ignored. A row matches when every resolvable criterion's expected text is a
substring of the row's cell in that column.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence
import logging
import re

from barrier_report_qa.exceptions import InvalidCriteriaError, MalformedRowError

logger = logging.getLogger(__name__)

GridRow = Sequence[str]
FilterCriteria = Mapping[str, Optional[str]]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[_\-\s]+")


def column_label(key: str) -> str:
    """
    Header text a criterion key stands for.

    Example:
        >>> column_label("typeOfUser")
        'type of user'
        >>> column_label("key_population")
        'key population'
    """
    spaced = _CAMEL_BOUNDARY.sub(" ", key)
    return _SEPARATORS.sub(" ", spaced).strip().lower()


def resolve_columns(headers: Sequence[str], criteria: FilterCriteria) -> Dict[str, int]:
    """
    Map each criterion key to the index of its column.

    Keys without a matching header are left out.
    """
    lowered = [h.lower() for h in headers]
    columns: Dict[str, int] = {}
    for key in criteria:
        label = column_label(key)
        if not label:
            continue
        for index, header in enumerate(lowered):
            if label in header:
                columns[key] = index
                break
        else:
            logger.debug(f"No column for criterion '{key}' in headers {list(headers)}")
    return columns


@dataclass
class VerificationReport:
    """
    Detailed outcome of a verification.

    Attributes:
        total_rows: Rows passed in
        matching_rows: Well-formed rows matching every criterion
        malformed_rows: Rows excluded for a wrong cell count
        columns: Criterion key -> resolved column index
        sample_match: First matching row, if any
        sample_mismatch: First well-formed row that did not match, if any
    """
    total_rows: int = 0
    matching_rows: int = 0
    malformed_rows: int = 0
    columns: Dict[str, int] = field(default_factory=dict)
    sample_match: Optional[List[str]] = None
    sample_mismatch: Optional[List[str]] = None

    @property
    def matched(self) -> bool:
        return self.matching_rows > 0


def _check_criteria(criteria: FilterCriteria) -> Dict[str, str]:
    active: Dict[str, str] = {}
    for key, expected in criteria.items():
        if expected is None or expected == "":
            continue
        if not isinstance(expected, str):
            raise InvalidCriteriaError(
                f"Criterion '{key}' must be a string, got {type(expected).__name__}",
                key=key,
                value=expected,
            )
        active[key] = expected
    return active


def verify_report(
    rows: Sequence[GridRow],
    headers: Sequence[str],
    criteria: FilterCriteria,
) -> VerificationReport:
    """
    Verify rows against criteria and describe the outcome.

    Args:
        rows: Scraped rows, cells in header order
        headers: Column header labels
        criteria: Logical column name -> expected substring; None or empty
            values are treated as absent. Dates must already be formatted
            the way the grid shows them (MM/DD/YYYY).

    Raises:
        InvalidCriteriaError: A criterion value is not a string
    """
    active = _check_criteria(criteria)
    columns = resolve_columns(headers, active)
    report = VerificationReport(total_rows=len(rows), columns=columns)

    for row_index, row in enumerate(rows):
        if len(row) != len(headers):
            error = MalformedRowError(row_index, len(row), len(headers))
            logger.warning(f"Skipping malformed row: {error}")
            report.malformed_rows += 1
            continue

        if all(active[key] in row[index] for key, index in columns.items()):
            report.matching_rows += 1
            if report.sample_match is None:
                report.sample_match = list(row)
        elif report.sample_mismatch is None:
            report.sample_mismatch = list(row)

    logger.info(
        f"Found {report.matching_rows} matching rows out of {report.total_rows} total rows"
        + (f" ({report.malformed_rows} malformed)" if report.malformed_rows else "")
    )
    if report.sample_match is not None:
        logger.debug(f"Sample matching row: {report.sample_match}")
    if report.sample_mismatch is not None:
        logger.debug(f"Sample non-matching row: {report.sample_mismatch}")
    return report


def verify(
    rows: Sequence[GridRow],
    headers: Sequence[str],
    criteria: FilterCriteria,
) -> bool:
    """
    True iff at least one well-formed row matches every resolvable criterion.

    Example:
        >>> verify(
        ...     [["Medical worker", "25 - 34 years", "05/01/2024"]],
        ...     ["Type of User", "Age", "Date"],
        ...     {"typeOfUser": "Medical", "age": "25 - 34"},
        ... )
        True
    """
    return verify_report(rows, headers, criteria).matched
