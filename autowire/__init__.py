"""
Autowire - component auto-discovery and registration for host applications.

Scans configured namespaces, classifies each concrete class by the marker it
satisfies, resolves it through the host's injection container and registers
it with the matching host subsystem.

Key Features:
- Namespace-restricted type index built once at construction
- Contract (base class) and tag (decorator) markers
- Two-phase registration: bootstrap bundles, then run-phase components
- Fatal, structured faults for every startup misconfiguration
- Layered settings from YAML/JSON, .env and environment variables
"""

__version__ = "0.1.0"

from .engine import AutoConfig, EnginePhase

from .markers import (
    Tag,
    Managed,
    Task,
    HealthCheck,
    InjectableProvider,
    Bundle,
    provider,
    path,
    resource_path,
    PROVIDER,
    RESOURCE,
)

from .interfaces import (
    Injector,
    Environment,
    Bootstrap,
)

from .scanner import TypeIndex

from .filtering import (
    is_instantiable,
    filter_instantiable,
)

from .registrars import (
    Category,
    QueryKind,
    Registrar,
    BOOTSTRAP_REGISTRARS,
    RUN_REGISTRARS,
)

from .diagnostics import (
    EventType,
    RegistrationEvent,
    DiagnosticListener,
    LoggingDiagnosticListener,
    RegistrationDiagnostics,
)

from .config import (
    AutoConfigSettings,
    SettingsLoader,
)

from .faults import (
    Fault,
    FaultDomain,
    Severity,
    AutowireFault,
    ConfigurationFault,
    ScanFault,
    ResolutionFault,
    PhaseFault,
)

__all__ = [
    # Engine
    "AutoConfig",
    "EnginePhase",

    # Markers
    "Tag",
    "Managed",
    "Task",
    "HealthCheck",
    "InjectableProvider",
    "Bundle",
    "provider",
    "path",
    "resource_path",
    "PROVIDER",
    "RESOURCE",

    # Host protocols
    "Injector",
    "Environment",
    "Bootstrap",

    # Discovery
    "TypeIndex",
    "is_instantiable",
    "filter_instantiable",

    # Registration
    "Category",
    "QueryKind",
    "Registrar",
    "BOOTSTRAP_REGISTRARS",
    "RUN_REGISTRARS",

    # Diagnostics
    "EventType",
    "RegistrationEvent",
    "DiagnosticListener",
    "LoggingDiagnosticListener",
    "RegistrationDiagnostics",

    # Config
    "AutoConfigSettings",
    "SettingsLoader",

    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "AutowireFault",
    "ConfigurationFault",
    "ScanFault",
    "ResolutionFault",
    "PhaseFault",
]
