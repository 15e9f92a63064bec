"""VSCode Server - run VS Code Server on AWS with the CDK."""

__version__ = "1.0.0"

from .engine import ENGINE_NAME, NAMESPACE, EngineFactory, ServerEngine, ServerHandle  # noqa: F401
from .enums import LinuxArchitectureType, LinuxFlavorType  # noqa: F401
from .exceptions import (  # noqa: F401
    ConfigurationError,
    ConflictingOptionError,
    EngineNotFoundError,
    InvalidOptionError,
    MissingDependencyError,
    PreconditionViolationError,
    UnregisteredTypeError,
    VSCodeServerError,
)
from .props import ResolvedVSCodeServerProps, VSCodeServerProps, resolve_props  # noqa: F401
from .vscode_server_construct import VSCodeServer  # noqa: F401
