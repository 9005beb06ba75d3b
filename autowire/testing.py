"""
Testing utilities for hosts wiring components with AutoConfig.

Recording doubles for the host collaborators, so a host application can
assert what its configured namespaces would register.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from .diagnostics import EventType, RegistrationEvent


class StaticInjector:
    """
    Minimal injector for tests.

    Builds classes with no arguments unless a factory or a ready instance
    was bound for them. Tracks resolution calls for assertions.
    """

    def __init__(self, bindings: Optional[Dict[type, Any]] = None):
        self._factories: Dict[type, Callable[[], Any]] = {}
        self.resolved: List[type] = []
        for cls, value in (bindings or {}).items():
            self.bind_instance(cls, value)

    def bind(self, cls: type, factory: Callable[[], Any]) -> "StaticInjector":
        self._factories[cls] = factory
        return self

    def bind_instance(self, cls: type, instance: Any) -> "StaticInjector":
        return self.bind(cls, lambda: instance)

    def fail(self, cls: type, error: BaseException) -> "StaticInjector":
        """Make resolution of ``cls`` raise ``error``."""
        def _raise():
            raise error
        return self.bind(cls, _raise)

    def resolve(self, cls: Type[Any]) -> Any:
        self.resolved.append(cls)
        factory = self._factories.get(cls, cls)
        return factory()

    def reset(self) -> None:
        """Reset tracking."""
        self.resolved.clear()


class RecordingEnvironment:
    """Host environment double recording every registration call in order."""

    def __init__(self):
        self.calls: List[Tuple[str, Any]] = []

    def _record(self, method: str, value: Any) -> None:
        self.calls.append((method, value))

    def register_health_check(self, health_check: Any) -> None:
        self._record("register_health_check", health_check)

    def register_provider(self, provider: Any) -> None:
        self._record("register_provider", provider)

    def register_injectable_provider(self, provider_cls: type) -> None:
        self._record("register_injectable_provider", provider_cls)

    def register_resource(self, resource_cls: type) -> None:
        self._record("register_resource", resource_cls)

    def register_task(self, task: Any) -> None:
        self._record("register_task", task)

    def manage(self, managed: Any) -> None:
        self._record("manage", managed)

    def registered(self, method: str) -> List[Any]:
        """Values passed to ``method``, in call order."""
        return [value for name, value in self.calls if name == method]

    def methods(self) -> List[str]:
        return [name for name, _ in self.calls]


class RecordingBootstrap:
    """Bootstrap context double recording registered bundles."""

    def __init__(self):
        self.bundles: List[Any] = []

    def register_bundle(self, bundle: Any) -> None:
        self.bundles.append(bundle)


class RecordingDiagnosticListener:
    """Diagnostic listener keeping every event."""

    def __init__(self):
        self.events: List[RegistrationEvent] = []

    def on_event(self, event: RegistrationEvent) -> None:
        self.events.append(event)

    def registrations(self) -> List[Tuple[str, type]]:
        """``(category, class)`` for every registration event."""
        return [
            (event.category, event.component)
            for event in self.events
            if event.type == EventType.REGISTRATION
        ]


# Pytest fixtures (if pytest is available)
try:
    import pytest

    @pytest.fixture
    def injector():
        """Provide a fresh StaticInjector."""
        return StaticInjector()

    @pytest.fixture
    def environment():
        """Provide a fresh RecordingEnvironment."""
        return RecordingEnvironment()

    @pytest.fixture
    def bootstrap():
        """Provide a fresh RecordingBootstrap."""
        return RecordingBootstrap()

    @pytest.fixture
    def recorder():
        """Provide a RecordingDiagnosticListener."""
        return RecordingDiagnosticListener()

except ImportError:
    # pytest not available - skip fixtures
    pass
