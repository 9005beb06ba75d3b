"""
Registration diagnostics - observability for discovery and registration.
"""

import dataclasses
import logging
import time
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger("autowire.diagnostics")


class EventType(Enum):
    """Types of engine events."""
    PHASE_START = "phase_start"
    PHASE_COMPLETE = "phase_complete"
    PHASE_FAILURE = "phase_failure"
    REGISTRATION = "registration"


@dataclasses.dataclass
class RegistrationEvent:
    """A diagnostic event emitted by the engine."""
    type: EventType
    phase: str
    timestamp: float = dataclasses.field(default_factory=time.time)
    category: Optional[str] = None
    component: Optional[type] = None
    error: Optional[BaseException] = None
    metadata: Dict[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def component_name(self) -> Optional[str]:
        if self.component is None:
            return None
        return f"{self.component.__module__}.{self.component.__qualname__}"


class DiagnosticListener(Protocol):
    """Interface for diagnostic listeners."""
    def on_event(self, event: RegistrationEvent) -> None:
        """Called when an engine event occurs."""
        ...


_LABELS = {
    "managed": "managed",
    "task": "task",
    "health_check": "healthCheck",
    "injectable_provider": "injectableProvider",
    "provider": "provider class",
    "resource": "resource class",
    "bundle": "bundle class",
}


class LoggingDiagnosticListener:
    """Diagnostic listener that writes one log line per event."""
    def __init__(self, log_level: int = logging.INFO):
        self.log_level = log_level

    def on_event(self, event: RegistrationEvent) -> None:
        if event.type == EventType.REGISTRATION:
            label = _LABELS.get(event.category or "", event.category)
            suffix = " during bootstrap" if event.phase == "bootstrap" else ""
            logger.log(self.log_level, f"Added {label}: {event.component_name}{suffix}")
        elif event.type == EventType.PHASE_START:
            logger.debug(f"Starting {event.phase} phase")
        elif event.type == EventType.PHASE_COMPLETE:
            logger.log(
                self.log_level,
                f"{event.phase.capitalize()} phase complete "
                f"({event.metadata.get('registered', 0)} registered)",
            )
        elif event.type == EventType.PHASE_FAILURE:
            logger.error(f"{event.phase.capitalize()} phase failed: {event.error}")


class RegistrationDiagnostics:
    """Coordinator for diagnostic listeners."""
    def __init__(self, listeners: Optional[List[DiagnosticListener]] = None):
        self._listeners: List[DiagnosticListener] = list(listeners or [])

    @classmethod
    def default(cls) -> "RegistrationDiagnostics":
        return cls([LoggingDiagnosticListener()])

    @property
    def listeners(self) -> List[DiagnosticListener]:
        return list(self._listeners)

    def add_listener(self, listener: DiagnosticListener) -> None:
        """Add a diagnostic listener."""
        self._listeners.append(listener)

    def emit(self, event_type: EventType, phase: str, **kwargs) -> RegistrationEvent:
        """Emit an event to all listeners."""
        event = RegistrationEvent(type=event_type, phase=phase, **kwargs)
        for listener in self._listeners:
            try:
                listener.on_event(event)
            except Exception as e:
                # A broken listener must not abort startup
                logger.error(f"Diagnostic listener error: {e}")
        return event
