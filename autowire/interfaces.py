"""
Host collaborator protocols.

The engine drives these contracts but never implements them. Any object
with matching methods works; no subclassing is required.
"""

from typing import Any, Protocol, Type, TypeVar, runtime_checkable


T = TypeVar("T")


@runtime_checkable
class Injector(Protocol):
    """
    Injection container - how to obtain an instance of a discovered class.

    Raising from ``resolve`` (missing binding, constructor failure) aborts
    the current phase.
    """

    def resolve(self, cls: Type[T]) -> T:
        ...


@runtime_checkable
class Environment(Protocol):
    """Host environment available during the run phase."""

    def register_health_check(self, health_check: Any) -> None:
        ...

    def register_provider(self, provider: Any) -> None:
        ...

    def register_injectable_provider(self, provider_cls: type) -> None:
        ...

    def register_resource(self, resource_cls: type) -> None:
        ...

    def register_task(self, task: Any) -> None:
        ...

    def manage(self, managed: Any) -> None:
        ...


@runtime_checkable
class Bootstrap(Protocol):
    """Host bootstrap context available before the environment exists."""

    def register_bundle(self, bundle: Any) -> None:
        ...
