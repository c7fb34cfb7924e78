"""
Exceptions for values outside the declared vocabularies and for report data.
"""

from typing import Any, Optional, Sequence

from barrier_report_qa.exceptions.base import BarrierReportQAError


class ValidationError(BarrierReportQAError):
    """Base exception for caller-supplied values that fail validation."""
    pass


class UnsupportedLanguageError(ValidationError):
    """
    Language code outside the supported set.
    """
    
    def __init__(self, language: str, supported: Sequence[str]):
        super().__init__(
            f"Unsupported language: {language}. "
            f"Supported languages are: {', '.join(supported)}",
            {"language": language, "supported": list(supported)},
        )
        self.language = language
        self.supported = list(supported)


class InvalidCriteriaError(ValidationError):
    """
    A filter criterion or vocabulary value the suite cannot use.
    """
    
    def __init__(self, message: str, key: Optional[str] = None, value: Any = None):
        super().__init__(message, {"key": key, "value": value})
        self.key = key
        self.value = value


class MalformedRowError(ValidationError):
    """
    A scraped grid row whose cell count differs from the header count.
    
    Never raised out of the verifier: rows are excluded and the error is
    only logged.
    """
    
    def __init__(self, row_index: int, cell_count: int, header_count: int):
        super().__init__(
            f"Row {row_index} has {cell_count} cells, expected {header_count}",
            {"row_index": row_index, "cell_count": cell_count, "header_count": header_count},
        )
        self.row_index = row_index
        self.cell_count = cell_count
        self.header_count = header_count
