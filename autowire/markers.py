"""
Capability markers.

A class is picked up by the engine when it satisfies one of these markers:

- Contracts: base classes to subclass (``Managed``, ``Task``, ``HealthCheck``,
  ``InjectableProvider``, ``Bundle``).
- Tags: class decorators (``@provider``, ``@path("/users")``).

Example:
    from autowire.markers import Managed, path

    class Database(Managed):
        def start(self): ...
        def stop(self): ...

    @path("/users")
    class UserResource:
        ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Optional, Type, TypeVar


T = TypeVar("T")

TAGS_ATTR = "__autowire_tags__"


# ============================================================================
# Tags
# ============================================================================

@dataclass(frozen=True)
class Tag:
    """
    Named marker attached to a class by decoration.

    Usage:
        resource = Tag("resource")

        @resource
        class Thing: ...
    """

    name: str

    def __call__(self, cls: Type[T]) -> Type[T]:
        if not isinstance(cls, type):
            raise TypeError(f"@{self.name} can only decorate classes, got {cls!r}")
        own = cls.__dict__.get(TAGS_ATTR, frozenset())
        setattr(cls, TAGS_ATTR, frozenset(own | {self.name}))
        return cls

    def __repr__(self) -> str:
        return f"Tag({self.name!r})"


def own_tags(cls: type) -> FrozenSet[str]:
    """Tags attached directly to ``cls`` (inherited tags are not included)."""
    return cls.__dict__.get(TAGS_ATTR, frozenset())


def has_tag(cls: type, tag: Tag) -> bool:
    """Whether ``tag`` was attached directly to ``cls``."""
    return tag.name in own_tags(cls)


PROVIDER = Tag("provider")
RESOURCE = Tag("resource")


def provider(cls: Type[T]) -> Type[T]:
    """
    Mark a class as a general provider (serializers, exception mappers, ...).

    The engine resolves an instance and passes it to
    ``Environment.register_provider``.
    """
    return PROVIDER(cls)


def path(template: str) -> Callable[[Type[T]], Type[T]]:
    """
    Mark a class as a request-handling resource rooted at ``template``.

    The class itself (not an instance) is handed to
    ``Environment.register_resource``; the host instantiates it per request.

    Example:
        @path("/users/{id}")
        class UserResource:
            ...
    """
    if not isinstance(template, str) or not template:
        raise TypeError("@path requires a non-empty route template")

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__autowire_path__ = template  # type: ignore
        return RESOURCE(cls)

    return decorator


def resource_path(cls: type) -> Optional[str]:
    """Route template of a resource class, if any."""
    return getattr(cls, "__autowire_path__", None)


# ============================================================================
# Contracts
# ============================================================================

class Managed(ABC):
    """Object whose lifecycle is driven by the host (started and stopped)."""

    @abstractmethod
    def start(self) -> None:
        ...

    @abstractmethod
    def stop(self) -> None:
        ...


class Task(ABC):
    """Administrative task the host can trigger on demand."""

    name: str = ""

    @abstractmethod
    def execute(self, parameters: dict[str, Any]) -> Any:
        ...


class HealthCheck(ABC):
    """Health check executed by the host's health endpoint."""

    name: str = ""

    @abstractmethod
    def check(self) -> Any:
        ...


class InjectableProvider(ABC):
    """
    Content-negotiation provider.

    Registered as a class; the host instantiates it itself.
    """

    @abstractmethod
    def get_injectable(self, context: Any) -> Any:
        ...


class Bundle(ABC):
    """Plugin applied to the bootstrap context before the environment exists."""

    @abstractmethod
    def initialize(self, bootstrap: Any) -> None:
        ...

    def run(self, environment: Any) -> None:
        pass
