"""Error bookkeeping for the profile chat services.

Failures are recorded per component and then propagated unchanged to the
caller. Nothing here retries or swallows an error.
"""

import functools
import threading
import traceback
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
from enum import Enum

from ..logging_config import get_logger


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComponentStatus(Enum):
    """Component status levels."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FAILED = "failed"
    UNKNOWN = "unknown"


@dataclass
class ErrorRecord:
    """Record of an error occurrence."""
    component_name: str
    error: Exception
    severity: ErrorSeverity
    timestamp: datetime = field(default_factory=datetime.now)
    traceback_str: str = ""


class ErrorHandler:
    """Central record of component failures."""

    def __init__(self, max_records: int = 500):
        self.logger = get_logger("error_handler")
        self.max_records = max_records
        self.error_records: List[ErrorRecord] = []
        self.component_error_counts: Dict[str, int] = {}
        self.component_status: Dict[str, ComponentStatus] = {}
        self._lock = threading.Lock()

    def register_component(self, component_name: str) -> None:
        """Register a component for error tracking."""
        with self._lock:
            self.component_error_counts.setdefault(component_name, 0)
            self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)
        self.logger.debug(f"Component registered: {component_name}")

    def handle_error(self, component_name: str, error: Exception, severity: ErrorSeverity) -> ErrorRecord:
        """Record an error raised by a component."""
        error_record = ErrorRecord(
            component_name=component_name,
            error=error,
            severity=severity,
            traceback_str=traceback.format_exc()
        )

        with self._lock:
            self.error_records.append(error_record)
            if len(self.error_records) > self.max_records:
                del self.error_records[:-self.max_records]

            self.component_error_counts[component_name] = \
                self.component_error_counts.get(component_name, 0) + 1

            if severity == ErrorSeverity.CRITICAL:
                self.component_status[component_name] = ComponentStatus.FAILED
            elif severity == ErrorSeverity.HIGH:
                self.component_status[component_name] = ComponentStatus.DEGRADED

        self.logger.error(f"Error in {component_name}: {type(error).__name__}: {error} "
                          f"(Severity: {severity.value})")
        return error_record

    def get_error_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "total_errors": len(self.error_records),
                "component_error_counts": dict(self.component_error_counts),
                "component_status": {
                    name: status.value for name, status in self.component_status.items()
                }
            }

    def get_component_health(self) -> Dict[str, ComponentStatus]:
        with self._lock:
            return dict(self.component_status)

    def reset_error_counts(self, component_name: Optional[str] = None) -> None:
        """Reset error counts for a component or all components."""
        with self._lock:
            names = [component_name] if component_name else list(self.component_error_counts)
            for name in names:
                if name in self.component_error_counts:
                    self.component_error_counts[name] = 0
                    self.component_status[name] = ComponentStatus.HEALTHY

    def get_error_summary(self, hours: int = 24) -> Dict[str, Any]:
        """Get summary of errors in the last N hours."""
        cutoff_time = datetime.now() - timedelta(hours=hours)

        with self._lock:
            recent_errors = [e for e in self.error_records if e.timestamp >= cutoff_time]

        component_counts: Dict[str, int] = {}
        severity_counts = {severity.value: 0 for severity in ErrorSeverity}
        for error in recent_errors:
            component_counts[error.component_name] = component_counts.get(error.component_name, 0) + 1
            severity_counts[error.severity.value] += 1

        return {
            "total_errors": len(recent_errors),
            "component_counts": component_counts,
            "severity_counts": severity_counts,
            "time_period_hours": hours
        }


global_error_handler = ErrorHandler()


def records_errors(component_name: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                   error_handler: Optional[ErrorHandler] = None):
    """Decorator that records any exception with the error handler and re-raises it."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                (error_handler or global_error_handler).handle_error(component_name, e, severity)
                raise
        return wrapper
    return decorator
