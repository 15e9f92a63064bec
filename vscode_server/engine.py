"""Construction engine abstraction for the VSCodeServer construct."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from constructs import Construct

from .exceptions import EngineNotFoundError
from .props import ResolvedVSCodeServerProps

NAMESPACE = "cdk_vscode_server"
ENGINE_NAME = f"{NAMESPACE}.VSCodeServer"


@dataclass
class ServerHandle:
    """Outputs of a materialized VSCodeServer."""

    domain_name: str
    url: str
    password: str
    scope: Construct
    resources: Optional[Dict[str, Any]] = None

    @property
    def node(self):
        """The construct tree node the server was built in."""
        return self.scope.node

    @property
    def is_construct(self) -> bool:
        return Construct.is_construct(self.scope)

    def to_string(self) -> str:
        return self.scope.to_string()


class ServerEngine(ABC):
    """Abstract interface for engines that materialize a VSCodeServer."""

    @abstractmethod
    def build(
        self,
        scope: Construct,
        props: ResolvedVSCodeServerProps
    ) -> ServerHandle:
        """Materialize the server inside a scope.

        Args:
            scope: Construct the server resources are created in
            props: Resolved and validated properties

        Returns:
            ServerHandle with the derived outputs
        """
        pass


class EngineFactory:
    """Factory for creating construction engines by name."""

    _engines: Dict[str, type] = {}

    @classmethod
    def register_engine(cls, name: str, engine_class: type) -> None:
        """Register an engine implementation.

        Args:
            name: Stable engine name (e.g., 'cdk_vscode_server.VSCodeServer')
            engine_class: Class implementing ServerEngine
        """
        cls._engines[name] = engine_class

    @classmethod
    def create_engine(cls, name: str, **kwargs) -> ServerEngine:
        """Create an engine instance.

        Args:
            name: Engine name
            **kwargs: Engine constructor arguments

        Returns:
            Engine instance

        Raises:
            EngineNotFoundError: If engine not registered
        """
        if name not in cls._engines:
            raise EngineNotFoundError(f"Engine '{name}' not registered")
        return cls._engines[name](**kwargs)

    @classmethod
    def list_engines(cls) -> List[str]:
        """List all registered engines."""
        return list(cls._engines.keys())
