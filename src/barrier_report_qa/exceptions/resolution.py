"""
Element resolution and selection exceptions.

Every error here carries the logical field name and, where it applies, the
requested value and the candidate texts that were on screen, so a failure
can be diagnosed from the message alone.
"""

from typing import List, Optional, Sequence

from barrier_report_qa.exceptions.base import BarrierReportQAError


class ResolutionError(BarrierReportQAError):
    """Base exception for failures while resolving or driving a UI field."""
    pass


class FieldNotFoundError(ResolutionError):
    """
    No locator strategy resolved the field within its budget.
    
    Attributes:
        field_name: Logical name of the field
        strategies: Descriptions of the strategies that were tried
        timeout_ms: Resolution budget that was exhausted
    """
    
    def __init__(
        self,
        field_name: str,
        strategies: Sequence[str],
        timeout_ms: int,
        value: Optional[str] = None,
    ):
        super().__init__(
            f"Field '{field_name}' could not be resolved with any locator strategy",
            {
                "field": field_name,
                "value": value,
                "strategies": list(strategies),
                "timeout_ms": timeout_ms,
            },
        )
        self.field_name = field_name
        self.strategies = list(strategies)
        self.timeout_ms = timeout_ms
        self.value = value


class StabilityTimeoutError(ResolutionError):
    """
    A polled region never settled within the timeout.
    
    Attributes:
        description: What was being waited for
        timeout_ms: The exhausted budget
        rounds: Number of polling rounds observed
        last_count: Size of the last observed snapshot, if any
    """
    
    def __init__(
        self,
        description: str,
        timeout_ms: int,
        rounds: int = 0,
        last_count: Optional[int] = None,
    ):
        super().__init__(
            f"Timed out after {timeout_ms}ms waiting for {description}",
            {"timeout_ms": timeout_ms, "rounds": rounds, "last_count": last_count},
        )
        self.description = description
        self.timeout_ms = timeout_ms
        self.rounds = rounds
        self.last_count = last_count


class OptionNotFoundError(ResolutionError):
    """
    The stable option list held no acceptable match for the requested value.
    """
    
    def __init__(self, field_name: str, value: str, candidates: Sequence[str]):
        super().__init__(
            f"Option \"{value}\" not found in dropdown {field_name}. "
            f"Available options: {', '.join(candidates)}",
            {"field": field_name, "value": value, "candidates": list(candidates)},
        )
        self.field_name = field_name
        self.value = value
        self.candidates: List[str] = list(candidates)


class InteractionFailedError(ResolutionError):
    """
    An option matched, but every interaction fallback failed to activate it.
    
    Reported once for the whole fallback list, not once per mechanism.
    """
    
    def __init__(
        self,
        field_name: str,
        value: str,
        candidates: Sequence[str],
        attempts: Sequence[str],
        last_error: Optional[str] = None,
    ):
        super().__init__(
            f"Could not activate option \"{value}\" in {field_name} "
            f"(tried: {', '.join(attempts)})",
            {
                "field": field_name,
                "value": value,
                "candidates": list(candidates),
                "attempts": list(attempts),
                "last_error": last_error,
            },
        )
        self.field_name = field_name
        self.value = value
        self.candidates = list(candidates)
        self.attempts = list(attempts)
        self.last_error = last_error
