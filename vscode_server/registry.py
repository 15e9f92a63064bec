"""Process-wide registration of the construct's public types and engines.

``initialize()`` must run before a VSCodeServer hands props to an engine.
It is safe to call from several threads and any number of times; only the
first call does any work.
"""

import logging
import threading
from typing import Dict, List

from .engine import NAMESPACE
from .exceptions import UnregisteredTypeError

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_initialized = False
_types: Dict[str, type] = {}


def initialize() -> bool:
    """Register the construct types and the default engine.

    Returns:
        True if this call performed the registration, False if it was
        already done
    """
    global _initialized

    if _initialized:
        return False

    with _lock:
        if _initialized:
            return False

        # Imported here to avoid a cycle with the construct module
        from .cdk_engine import CdkServerEngine
        from .engine import ENGINE_NAME, EngineFactory
        from .enums import LinuxArchitectureType, LinuxFlavorType
        from .props import ResolvedVSCodeServerProps, VSCodeServerProps
        from .vscode_server_construct import VSCodeServer

        for registered in (
            LinuxArchitectureType,
            LinuxFlavorType,
            VSCodeServerProps,
            ResolvedVSCodeServerProps,
            VSCodeServer,
        ):
            _types[f"{NAMESPACE}.{registered.__name__}"] = registered

        EngineFactory.register_engine(ENGINE_NAME, CdkServerEngine)

        _initialized = True
        logger.info(f"Registered {len(_types)} types under {NAMESPACE}")
        return True


def is_initialized() -> bool:
    return _initialized


def lookup(fqn: str) -> type:
    """Get a registered type by its fully qualified name.

    Args:
        fqn: Name such as 'cdk_vscode_server.VSCodeServerProps'

    Returns:
        The registered type

    Raises:
        UnregisteredTypeError: If no type is registered under the name
    """
    initialize()
    if fqn not in _types:
        raise UnregisteredTypeError(f"Type '{fqn}' is not registered")
    return _types[fqn]


def require_registered(value: object) -> None:
    """Ensure a value's type may cross the engine boundary.

    Raises:
        UnregisteredTypeError: If the value's type is not registered
    """
    initialize()
    if type(value) not in _types.values():
        raise UnregisteredTypeError(
            f"Type '{type(value).__module__}.{type(value).__name__}' "
            f"is not registered under {NAMESPACE}"
        )


def registered_names() -> List[str]:
    initialize()
    return sorted(_types)
