"""VSCode Server construct - spin it up in under 10 minutes."""

import logging
from typing import Mapping, Optional, Union

from constructs import Construct

from . import registry
from .engine import ENGINE_NAME, EngineFactory, ServerEngine, ServerHandle
from .exceptions import PreconditionViolationError
from .props import ResolvedVSCodeServerProps, VSCodeServerProps, resolve_props

logger = logging.getLogger(__name__)

PropsInput = Union[VSCodeServerProps, ResolvedVSCodeServerProps, Mapping, None]


class VSCodeServer(Construct):
    """Construct for a VS Code server.

    Props are resolved and validated before anything is handed to the
    construction engine, so a misconfiguration fails synthesis before any
    resource is defined.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        props: PropsInput = None,
        *,
        engine: Optional[ServerEngine] = None,
        engine_name: str = ENGINE_NAME,
        **kwargs
    ) -> None:
        """Initialize VSCode Server construct.

        Args:
            scope: CDK scope
            construct_id: Construct identifier
            props: Server properties (partial, resolved or a serialized dict)
            engine: Engine instance; looked up by engine_name when omitted
            engine_name: Name of a registered engine
            **kwargs: Additional construct properties

        Raises:
            ConfigurationError: If the props are invalid
            UnregisteredTypeError: If props are of an unsupported type
            EngineNotFoundError: If no engine is registered under engine_name
        """
        super().__init__(scope, construct_id, **kwargs)

        self._handle: Optional[ServerHandle] = None

        registry.initialize()

        if isinstance(props, Mapping):
            props = VSCodeServerProps.from_dict(props)
        elif props is None:
            props = VSCodeServerProps()
        registry.require_registered(props)

        self._props = resolve_props(props)

        if engine is None:
            engine = EngineFactory.create_engine(engine_name)
        registry.require_registered(self._props)

        self._handle = engine.build(self, self._props)
        logger.info(f"VSCodeServer {self.node.path} constructed")

    @property
    def is_constructed(self) -> bool:
        return self._handle is not None

    @property
    def props(self) -> ResolvedVSCodeServerProps:
        """The resolved properties."""
        return self._props

    @property
    def handle(self) -> ServerHandle:
        """Outputs returned by the construction engine."""
        return self._require_handle("handle")

    @property
    def domain_name(self) -> str:
        """The name of the domain the server is reachable on."""
        return self._require_handle("domain_name").domain_name

    @property
    def url(self) -> str:
        """The URL opening VS Code in the home folder."""
        return self._require_handle("url").url

    @property
    def password(self) -> str:
        """The password to login to the server."""
        return self._require_handle("password").password

    def _require_handle(self, output: str) -> ServerHandle:
        if self._handle is None:
            raise PreconditionViolationError(
                f"Cannot read {output} of {self.node.path} before construction completes"
            )
        return self._handle
