"""
Instantiability filter.

The single rule keeping the engine from handing a non-constructible
declaration to the injector.
"""

import inspect
from abc import ABC
from typing import FrozenSet, Iterable


def is_protocol(cls: type) -> bool:
    """Whether ``cls`` is a ``typing.Protocol`` class (a pure contract)."""
    return bool(cls.__dict__.get("_is_protocol", False))


def is_declared_abstract(cls: type) -> bool:
    """
    Whether ``cls`` is declared abstract even if it has no abstract methods.

    A class is declared abstract when it lists ``ABC`` directly among its
    bases or sets ``__abstract__ = True`` in its own body.
    """
    return ABC in cls.__bases__ or cls.__dict__.get("__abstract__", False) is True


def is_instantiable(cls: object) -> bool:
    """
    Whether ``cls`` can be constructed directly.

    Rejects non-classes, protocols, classes with unimplemented abstract
    methods, and declared-abstract classes.
    """
    if not inspect.isclass(cls):
        return False
    if is_protocol(cls):
        return False
    if inspect.isabstract(cls):
        return False
    return not is_declared_abstract(cls)


def filter_instantiable(types: Iterable[type]) -> FrozenSet[type]:
    """Keep only the instantiable classes of ``types``. Idempotent."""
    return frozenset(cls for cls in types if is_instantiable(cls))
