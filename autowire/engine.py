"""
AutoConfig engine - orchestrates discovery and registration.

Two phases, each run at most once:

- ``initialize(bootstrap, injector)``: registers bundles before the host
  environment exists
- ``run(environment, injector)``: registers health checks, providers,
  injectable providers, resources, tasks and managed objects, in that order
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .diagnostics import (
    DiagnosticListener,
    EventType,
    RegistrationDiagnostics,
)
from .faults import PhaseFault
from .interfaces import Bootstrap, Environment, Injector
from .registrars import BOOTSTRAP_REGISTRARS, RUN_REGISTRARS, Registrar
from .scanner import TypeIndex


logger = logging.getLogger("autowire.engine")


class EnginePhase(Enum):
    """Engine phases."""
    UNINITIALIZED = "uninitialized"
    BOOTSTRAPPED = "bootstrapped"
    RUN_COMPLETE = "run_complete"
    FAILED = "failed"


class AutoConfig:
    """
    Scans namespaces once and wires what it finds into a host application.

    Usage:
        auto = AutoConfig("app.services", "app.resources")
        auto.initialize(bootstrap, injector)
        ...
        auto.run(environment, injector)
    """

    def __init__(
        self,
        *packages: Union[str, Iterable[str]],
        diagnostics: Optional[RegistrationDiagnostics] = None,
    ):
        """
        Build the type index.

        Args:
            *packages: Namespace prefixes (strings, or a single iterable)
            diagnostics: Event sink; defaults to logging every registration

        Raises:
            ConfigurationFault: If no prefix is given or one is malformed
            ScanFault: If a module under a prefix fails to import
        """
        if len(packages) == 1 and not isinstance(packages[0], str):
            packages = tuple(packages[0])
        self.index = TypeIndex(packages)
        self.diagnostics = diagnostics or RegistrationDiagnostics.default()
        self.phase = EnginePhase.UNINITIALIZED
        self.counts: Dict[str, int] = {}
        logger.info(f"AutoConfig indexed {len(self.index)} classes under {list(self.index.packages)}")

    @classmethod
    def from_settings(cls, settings: Any, **kwargs) -> "AutoConfig":
        """Build an engine from an ``AutoConfigSettings``."""
        return cls(*settings.packages, **kwargs)

    @property
    def packages(self) -> Sequence[str]:
        return self.index.packages

    def on_event(self, listener: DiagnosticListener) -> "AutoConfig":
        """Register a diagnostic listener."""
        self.diagnostics.add_listener(listener)
        return self

    def initialize(self, bootstrap: Bootstrap, injector: Injector) -> List[type]:
        """
        Bootstrap phase: register bundles with the bootstrap context.

        Returns:
            Bundle classes registered

        Raises:
            PhaseFault: If called from any phase but UNINITIALIZED
            ResolutionFault: If a bundle cannot be resolved
        """
        if self.phase != EnginePhase.UNINITIALIZED:
            raise PhaseFault("initialize", self.phase, "bootstrap phase runs once")

        registered = self._execute("bootstrap", BOOTSTRAP_REGISTRARS, bootstrap, injector)
        self.phase = EnginePhase.BOOTSTRAPPED
        return registered

    def run(self, environment: Environment, injector: Injector) -> List[type]:
        """
        Run phase: register every other category with the environment.

        Returns:
            Classes registered, in registration order

        Raises:
            PhaseFault: If the run phase already ran, a previous phase failed,
                or bundles exist but ``initialize`` was skipped
            ResolutionFault: If a component cannot be resolved
        """
        if self.phase not in (EnginePhase.UNINITIALIZED, EnginePhase.BOOTSTRAPPED):
            raise PhaseFault("run", self.phase)

        if self.phase == EnginePhase.UNINITIALIZED:
            pending = [cls for r in BOOTSTRAP_REGISTRARS for cls in r.discover(self.index)]
            if pending:
                raise PhaseFault(
                    "run",
                    self.phase,
                    f"initialize() must register {len(pending)} bundle(s) first",
                )

        registered = self._execute("run", RUN_REGISTRARS, environment, injector)
        self.phase = EnginePhase.RUN_COMPLETE
        return registered

    def _execute(
        self,
        phase: str,
        registrars: Sequence[Registrar],
        host: Any,
        injector: Injector,
    ) -> List[type]:
        self.diagnostics.emit(EventType.PHASE_START, phase)
        registered: List[type] = []
        try:
            for registrar in registrars:
                added = registrar.register(self.index, injector, host, self.diagnostics, phase)
                self.counts[registrar.category.value] = len(added)
                registered.extend(added)
        except Exception as e:
            self.phase = EnginePhase.FAILED
            self.diagnostics.emit(EventType.PHASE_FAILURE, phase, error=e)
            raise

        self.diagnostics.emit(
            EventType.PHASE_COMPLETE,
            phase,
            metadata={"registered": len(registered)},
        )
        return registered

    def get_status(self) -> Dict[str, Any]:
        """
        Get current engine status.

        Returns:
            Status dict with phase, packages and per-category counts
        """
        return {
            "phase": self.phase.value,
            "packages": list(self.index.packages),
            "classes_indexed": len(self.index),
            "registered": dict(self.counts),
        }

    def __repr__(self) -> str:
        return f"AutoConfig(packages={list(self.index.packages)}, phase={self.phase.value})"
