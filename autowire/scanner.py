"""
Type Index - namespace-restricted class discovery.

Imports every module under the configured namespace prefixes once, records
the classes defined there, and answers two queries over that snapshot:

- ``subtypes_of(contract)``: in-scope subclasses of a contract
- ``tagged_with(tag)``: in-scope classes carrying a decorator tag
"""

import importlib
import inspect
import logging
import pkgutil
import re
import sys
import time
from types import ModuleType
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple, Union

from .faults import ConfigurationFault, ScanFault
from .markers import Tag, own_tags

logger = logging.getLogger("autowire.scanner")

_PREFIX_RE = re.compile(r"^[A-Za-z_]\w*(\.[A-Za-z_]\w*)*$")


def normalize_packages(packages: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    """
    Validate namespace prefixes and drop duplicates (first occurrence wins).

    Raises:
        ConfigurationFault: If no prefix is given or one is malformed
    """
    if isinstance(packages, str):
        packages = (packages,)

    result: List[str] = []
    for prefix in packages:
        if not isinstance(prefix, str):
            raise ConfigurationFault(
                f"namespace prefix must be a string, got {type(prefix).__name__}",
                key="packages",
            )
        prefix = prefix.strip()
        if not _PREFIX_RE.match(prefix):
            raise ConfigurationFault(
                f"'{prefix}' is not a dotted module path",
                key="packages",
            )
        if prefix not in result:
            result.append(prefix)

    if not result:
        raise ConfigurationFault("at least one namespace prefix is required", key="packages")
    return tuple(result)


def _within(module_name: str, prefix: str) -> bool:
    return module_name == prefix or module_name.startswith(prefix + ".")


class TypeIndex:
    """
    Immutable snapshot of the classes defined under a set of namespaces.

    Built once at construction. Classes whose ``__module__`` falls outside the
    configured prefixes are never visible, even when an in-scope module
    imports them.

    Example:
        index = TypeIndex(["app.services"])
        index.subtypes_of(Managed)
        index.tagged_with(PROVIDER)
    """

    def __init__(self, packages: Union[str, Iterable[str]]):
        self._packages = normalize_packages(packages)
        self._scan_stats: Dict[str, Any] = {
            "modules_scanned": 0,
            "classes_found": 0,
            "scan_time": 0.0,
        }

        start_time = time.time()
        classes: Set[type] = set()
        seen_modules: Set[str] = set()
        for prefix in self._packages:
            for module in self._iter_modules(prefix, seen_modules):
                classes.update(self._scan_module(module))
                self._scan_stats["modules_scanned"] += 1

        self._classes: FrozenSet[type] = frozenset(classes)
        self._subtypes = self._build_subtypes(self._classes)
        self._tagged = self._build_tagged(self._classes, self._subtypes)

        self._scan_stats["classes_found"] = len(self._classes)
        self._scan_stats["scan_time"] = time.time() - start_time
        logger.debug(
            f"Indexed {len(self._classes)} classes from "
            f"{self._scan_stats['modules_scanned']} modules under {list(self._packages)}"
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def packages(self) -> Tuple[str, ...]:
        return self._packages

    @property
    def classes(self) -> FrozenSet[type]:
        return self._classes

    def subtypes_of(self, contract: type) -> FrozenSet[type]:
        """
        All in-scope subclasses of ``contract`` (abstract or not), excluding itself.

        ``subtypes_of(object)`` is every indexed class.
        """
        return self._subtypes.get(contract, frozenset())

    def tagged_with(self, tag: Union[Tag, str]) -> FrozenSet[type]:
        """All in-scope classes carrying ``tag``, regardless of concreteness."""
        name = tag.name if isinstance(tag, Tag) else tag
        return self._tagged.get(name, frozenset())

    def in_scope(self, module_name: str) -> bool:
        return any(_within(module_name, prefix) for prefix in self._packages)

    def get_stats(self) -> Dict[str, Any]:
        """Get scanning statistics."""
        return self._scan_stats.copy()

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, cls: object) -> bool:
        return cls in self._classes

    def __repr__(self) -> str:
        return f"TypeIndex(packages={list(self._packages)}, classes={len(self._classes)})"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _iter_modules(self, prefix: str, seen: Set[str]) -> Iterator[ModuleType]:
        root = self._import_root(prefix)
        if root is None:
            return

        if root.__name__ not in seen:
            seen.add(root.__name__)
            yield root

        if not hasattr(root, "__path__"):
            return

        def onerror(name: str) -> None:
            raise ScanFault(name, sys.exc_info()[1] or ImportError(name))

        for _, name, _ in pkgutil.walk_packages(root.__path__, root.__name__ + ".", onerror=onerror):
            if name in seen:
                continue
            seen.add(name)
            yield self._import(name)

    def _import_root(self, prefix: str) -> Optional[ModuleType]:
        try:
            return importlib.import_module(prefix)
        except ModuleNotFoundError as e:
            # Only a missing prefix (or parent) means "nothing to scan".
            if e.name and _within(prefix, e.name):
                logger.warning(f"Namespace '{prefix}' not found, nothing to scan")
                return None
            raise ScanFault(prefix, e) from e
        except Exception as e:
            raise ScanFault(prefix, e) from e

    def _import(self, name: str) -> ModuleType:
        try:
            return importlib.import_module(name)
        except Exception as e:
            logger.error(f"Failed to import {name}: {e}")
            raise ScanFault(name, e) from e

    def _scan_module(self, module: ModuleType) -> Set[type]:
        found: Set[type] = set()
        pending = [obj for obj in vars(module).values() if inspect.isclass(obj)]
        # Walk class bodies too, so nested classes are indexed.
        while pending:
            obj = pending.pop()
            if obj in found or not self.in_scope(getattr(obj, "__module__", "") or ""):
                continue
            found.add(obj)
            pending.extend(v for v in vars(obj).values() if inspect.isclass(v))
        return found

    @staticmethod
    def _build_subtypes(classes: FrozenSet[type]) -> Dict[type, FrozenSet[type]]:
        subtypes: Dict[type, Set[type]] = {}
        for cls in classes:
            for base in cls.__mro__[1:]:
                subtypes.setdefault(base, set()).add(cls)
        return {base: frozenset(subs) for base, subs in subtypes.items()}

    @staticmethod
    def _build_tagged(
        classes: FrozenSet[type],
        subtypes: Dict[type, FrozenSet[type]],
    ) -> Dict[str, FrozenSet[type]]:
        tagged: Dict[str, Set[type]] = {}
        for cls in classes:
            for name in own_tags(cls):
                bucket = tagged.setdefault(name, set())
                bucket.add(cls)
                # Subclasses inherit tags; subtypes is already in-scope only.
                bucket.update(subtypes.get(cls, ()))
        return {name: frozenset(members) for name, members in tagged.items()}
