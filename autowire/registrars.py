"""
Category registrars.

One procedure, seven rows. Each row names the marker that classifies a
class, how to query the index for it, and which host call receives the
result.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Tuple, Union

from .diagnostics import EventType, RegistrationDiagnostics
from .faults import ResolutionFault
from .filtering import filter_instantiable
from .interfaces import Injector
from .markers import (
    PROVIDER,
    RESOURCE,
    Bundle,
    HealthCheck,
    InjectableProvider,
    Managed,
    Tag,
    Task,
)
from .scanner import TypeIndex


class Category(str, Enum):
    """Registration categories."""
    MANAGED = "managed"
    TASK = "task"
    HEALTH_CHECK = "health_check"
    INJECTABLE_PROVIDER = "injectable_provider"
    PROVIDER = "provider"
    RESOURCE = "resource"
    BUNDLE = "bundle"


class QueryKind(str, Enum):
    """How a marker is looked up in the index."""
    SUBTYPES = "subtypes"
    TAGGED = "tagged"


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


@dataclass(frozen=True)
class Registrar:
    """
    Discovers one category and hands it to the host.

    Attributes:
        category: Category this row registers
        marker: Contract class or tag
        query: Index query used for the marker
        target: Name of the host method receiving each component
        registers_type: Pass the class itself instead of a resolved instance
    """

    category: Category
    marker: Union[type, Tag]
    query: QueryKind
    target: str
    registers_type: bool = False

    def discover(self, index: TypeIndex) -> List[type]:
        """Instantiable classes for this category, in qualified-name order."""
        if self.query is QueryKind.SUBTYPES:
            found = index.subtypes_of(self.marker)
        else:
            found = index.tagged_with(self.marker)
        return sorted(filter_instantiable(found), key=qualified_name)

    def register(
        self,
        index: TypeIndex,
        injector: Injector,
        host: Any,
        diagnostics: RegistrationDiagnostics,
        phase: str,
    ) -> List[type]:
        """
        Register every discovered class of this category with ``host``.

        Returns:
            Classes registered, in registration order

        Raises:
            ResolutionFault: If the injector fails for any class; later
                classes are not registered
        """
        register = getattr(host, self.target)
        registered = []
        for cls in self.discover(index):
            if self.registers_type:
                register(cls)
            else:
                register(self._resolve(injector, cls))
            registered.append(cls)
            diagnostics.emit(
                EventType.REGISTRATION,
                phase,
                category=self.category.value,
                component=cls,
            )
        return registered

    def _resolve(self, injector: Injector, cls: type) -> Any:
        try:
            return injector.resolve(cls)
        except ResolutionFault:
            raise
        except Exception as e:
            raise ResolutionFault(cls, e, category=self.category.value) from e


BOOTSTRAP_REGISTRARS: Tuple[Registrar, ...] = (
    Registrar(Category.BUNDLE, Bundle, QueryKind.SUBTYPES, "register_bundle"),
)

# Providers precede the resources that rely on them.
RUN_REGISTRARS: Tuple[Registrar, ...] = (
    Registrar(Category.HEALTH_CHECK, HealthCheck, QueryKind.SUBTYPES, "register_health_check"),
    Registrar(Category.PROVIDER, PROVIDER, QueryKind.TAGGED, "register_provider"),
    Registrar(
        Category.INJECTABLE_PROVIDER,
        InjectableProvider,
        QueryKind.SUBTYPES,
        "register_injectable_provider",
        registers_type=True,
    ),
    Registrar(Category.RESOURCE, RESOURCE, QueryKind.TAGGED, "register_resource", registers_type=True),
    Registrar(Category.TASK, Task, QueryKind.SUBTYPES, "register_task"),
    Registrar(Category.MANAGED, Managed, QueryKind.SUBTYPES, "manage"),
)
