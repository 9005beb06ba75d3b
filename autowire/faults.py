"""
Autowire Faults - Structured fault taxonomy for discovery and registration.

Defines:
- Fault base class (structured fault objects)
- FaultDomain (explicit fault domains)
- Severity levels
- Concrete faults raised by the engine

Every fault raised here is a startup-time configuration problem. None of
them is recovered locally.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


# ============================================================================
# Severity & Domain
# ============================================================================

class Severity(str, Enum):
    """
    Fault severity levels.

    Determines the logging level used when the fault is reported.
    """
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class FaultDomain(str, Enum):
    """Functional area where a fault occurred."""
    CONFIG = "config"
    SCAN = "scan"
    DI = "di"
    LIFECYCLE = "lifecycle"


# ============================================================================
# Fault - Base Class
# ============================================================================

class Fault(Exception):
    """
    Base fault class - structured, typed fault object.

    Attributes:
        code: Stable machine-readable identifier (e.g., "SCAN_FAILED")
        message: Human-readable summary
        severity: Fault severity
        domain: Fault domain
        retryable: Whether this fault can be retried
        metadata: Additional context data
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        domain: FaultDomain,
        severity: Severity = Severity.FATAL,
        retryable: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.domain = domain
        self.severity = severity
        self.retryable = retryable
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self.code!r}, "
            f"domain={self.domain.value}, severity={self.severity.value})"
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize fault to dictionary.

        Returns:
            Dictionary representation suitable for logging
        """
        return {
            "code": self.code,
            "message": self.message,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "metadata": {k: repr(v) for k, v in self.metadata.items()},
        }


class AutowireFault(Fault):
    """Base class for every fault raised by autowire."""
    pass


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigurationFault(AutowireFault):
    """Engine configuration is missing or invalid."""

    def __init__(self, reason: str, *, key: Optional[str] = None):
        message = f"Invalid configuration: {reason}"
        if key:
            message = f"Invalid configuration for '{key}': {reason}"
        super().__init__(
            code="CONFIG_INVALID",
            message=message,
            domain=FaultDomain.CONFIG,
            metadata={"key": key, "reason": reason},
        )
        self.key = key
        self.reason = reason


# ============================================================================
# SCAN Faults
# ============================================================================

class ScanFault(AutowireFault):
    """A module under a scanned namespace could not be imported."""

    def __init__(self, module: str, cause: BaseException):
        super().__init__(
            code="SCAN_FAILED",
            message=f"Cannot scan module '{module}': {type(cause).__name__}: {cause}",
            domain=FaultDomain.SCAN,
            metadata={"module": module, "cause": cause},
        )
        self.module = module
        self.cause = cause


# ============================================================================
# DI Faults
# ============================================================================

class ResolutionFault(AutowireFault):
    """The injection container could not produce an instance."""

    def __init__(self, cls: type, cause: BaseException, *, category: Optional[str] = None):
        name = f"{cls.__module__}.{cls.__qualname__}"
        message = f"Cannot resolve '{name}': {type(cause).__name__}: {cause}"
        if category:
            message = f"Cannot resolve {category} '{name}': {type(cause).__name__}: {cause}"
        super().__init__(
            code="RESOLUTION_FAILED",
            message=message,
            domain=FaultDomain.DI,
            metadata={"type": name, "category": category, "cause": cause},
        )
        self.type = cls
        self.category = category
        self.cause = cause


# ============================================================================
# LIFECYCLE Faults
# ============================================================================

class PhaseFault(AutowireFault):
    """An engine phase was invoked from a state that does not allow it."""

    def __init__(self, operation: str, phase: Any, reason: Optional[str] = None):
        phase_value = getattr(phase, "value", phase)
        message = f"Cannot {operation} from phase '{phase_value}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            code="PHASE_INVALID",
            message=message,
            domain=FaultDomain.LIFECYCLE,
            metadata={"operation": operation, "phase": phase_value},
        )
        self.operation = operation
        self.phase = phase
