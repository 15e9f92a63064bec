"""Properties for the VSCodeServer construct.

``VSCodeServerProps`` is what callers write and may leave any field unset.
``ResolvedVSCodeServerProps`` is what ``resolve_props`` returns once every
default is applied and every cross-field rule has been checked. Only the
resolved shape is handed to an engine.
"""

import json
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from aws_cdk import aws_iam as iam

from .enums import LinuxArchitectureType, LinuxFlavorType
from .exceptions import (
    ConflictingOptionError,
    InvalidOptionError,
    MissingDependencyError,
)
from .mappings import get_ami_ssm_parameter
from .validation_utils import (
    validate_bool,
    validate_descriptor,
    validate_non_empty_string,
    validate_non_negative_int,
    validate_policy_statements,
    validate_port,
    validate_string,
    validate_tags,
)

logger = logging.getLogger(__name__)

PolicyStatementJson = Dict[str, Any]

# Serialized (camelCase) name of every property
FIELD_NAMES: Dict[str, str] = {
    "vscode_user": "vscodeUser",
    "vscode_password": "vscodePassword",
    "instance_name": "instanceName",
    "instance_volume_size": "instanceVolumeSize",
    "instance_class": "instanceClass",
    "instance_size": "instanceSize",
    "instance_operating_system": "instanceOperatingSystem",
    "instance_cpu_architecture": "instanceCpuArchitecture",
    "home_folder": "homeFolder",
    "dev_server_base_path": "devServerBasePath",
    "dev_server_port": "devServerPort",
    "additional_instance_role_policies": "additionalInstanceRolePolicies",
    "additional_tags": "additionalTags",
    "domain_name": "domainName",
    "hosted_zone_id": "hostedZoneId",
    "certificate_arn": "certificateArn",
    "auto_create_certificate": "autoCreateCertificate",
}

ATTRIBUTE_NAMES: Dict[str, str] = {v: k for k, v in FIELD_NAMES.items()}

DEFAULTS: Dict[str, Any] = {
    "vscode_user": "participant",
    "instance_name": "VSCodeServer",
    "instance_volume_size": 40,
    "instance_class": "m7g",
    "instance_size": "xlarge",
    "instance_operating_system": LinuxFlavorType.UBUNTU_22,
    "instance_cpu_architecture": LinuxArchitectureType.ARM,
    "home_folder": "/Workshop",
    "dev_server_base_path": "app",
    "dev_server_port": 8081,
    "additional_instance_role_policies": (),
    "additional_tags": {},
    "auto_create_certificate": False,
}


class _SerializableProps:
    """dict/JSON conversion shared by both property shapes."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a dict keyed by camelCase property names.

        Unset fields are left out of partial props and written as None
        for resolved props.
        """
        data = {}
        for prop in fields(self):
            value = getattr(self, prop.name)
            if value is None and isinstance(self, VSCodeServerProps):
                continue
            data[FIELD_NAMES[prop.name]] = _serialize_value(value)
        return data

    def to_json(self, **kwargs) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls, payload: str):
        """Parse from a JSON string."""
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise InvalidOptionError(f"Props are not valid JSON: {e}") from e
        return cls.from_dict(data)


@dataclass(frozen=True)
class VSCodeServerProps(_SerializableProps):
    """Properties for the VSCodeServer construct.

    Every field is optional. Unset fields fall back to the defaults listed
    in ``DEFAULTS`` when the props are resolved. An unset or empty
    ``vscode_password`` is generated during construction.
    ``additional_instance_role_policies`` takes statement JSON objects or
    ``iam.PolicyStatement`` instances.
    """

    vscode_user: Optional[str] = None
    vscode_password: Optional[str] = None
    instance_name: Optional[str] = None
    instance_volume_size: Optional[int] = None
    instance_class: Optional[str] = None
    instance_size: Optional[str] = None
    instance_operating_system: Optional[LinuxFlavorType] = None
    instance_cpu_architecture: Optional[LinuxArchitectureType] = None
    home_folder: Optional[str] = None
    dev_server_base_path: Optional[str] = None
    dev_server_port: Optional[int] = None
    additional_instance_role_policies: Optional[
        Tuple[Union[PolicyStatementJson, iam.PolicyStatement], ...]
    ] = None
    additional_tags: Optional[Dict[str, str]] = None
    domain_name: Optional[str] = None
    hosted_zone_id: Optional[str] = None
    certificate_arn: Optional[str] = None
    auto_create_certificate: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VSCodeServerProps":
        """Parse props from a dict keyed by camelCase property names.

        Args:
            data: Serialized props

        Returns:
            VSCodeServerProps

        Raises:
            InvalidOptionError: If a key is unknown or an enum value is invalid
        """
        if not isinstance(data, Mapping):
            raise InvalidOptionError("Props must be a mapping")

        unknown = [key for key in data if key not in ATTRIBUTE_NAMES]
        if unknown:
            raise InvalidOptionError(
                f"Unknown props: {', '.join(sorted(unknown))}",
                fields=sorted(unknown),
            )

        values = {}
        for key, value in data.items():
            if value is None:
                continue
            name = ATTRIBUTE_NAMES[key]
            if name == "instance_cpu_architecture":
                value = LinuxArchitectureType.parse(value, key)
            elif name == "instance_operating_system":
                value = LinuxFlavorType.parse(value, key)
            elif name == "additional_instance_role_policies" and isinstance(value, list):
                value = tuple(value)
            values[name] = value

        return cls(**values)


@dataclass(frozen=True)
class ResolvedVSCodeServerProps(_SerializableProps):
    """Fully resolved properties for the VSCodeServer construct.

    Produced by ``resolve_props``; never build one by hand.
    """

    vscode_user: str
    vscode_password: Optional[str]
    instance_name: str
    instance_volume_size: int
    instance_class: str
    instance_size: str
    instance_operating_system: LinuxFlavorType
    instance_cpu_architecture: LinuxArchitectureType
    home_folder: str
    dev_server_base_path: str
    dev_server_port: int
    additional_instance_role_policies: Tuple[PolicyStatementJson, ...]
    additional_tags: Dict[str, str]
    domain_name: Optional[str]
    hosted_zone_id: Optional[str]
    certificate_arn: Optional[str]
    auto_create_certificate: bool

    @property
    def needs_generated_password(self) -> bool:
        """Whether the password is left for the engine to generate."""
        return not self.vscode_password

    @property
    def instance_type_name(self) -> str:
        """EC2 instance type, e.g. ``m7g.xlarge``."""
        return f"{self.instance_class}.{self.instance_size}"

    @property
    def ami_parameter_name(self) -> str:
        """SSM parameter name of the machine image."""
        return get_ami_ssm_parameter(
            self.instance_cpu_architecture,
            self.instance_operating_system,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResolvedVSCodeServerProps":
        """Parse and resolve props from a serialized dict."""
        return resolve_props(VSCodeServerProps.from_dict(data))


AnyProps = Union[VSCodeServerProps, ResolvedVSCodeServerProps]


def resolve_props(props: Optional[AnyProps] = None) -> ResolvedVSCodeServerProps:
    """Apply defaults and validate construct properties.

    Explicitly set values are never replaced, including falsy ones such as
    ``0``, ``False`` or ``""``. Resolving already resolved props returns an
    equal value.

    Args:
        props: Partial (or resolved) props; None means all defaults

    Returns:
        ResolvedVSCodeServerProps

    Raises:
        InvalidOptionError: If a value has the wrong type or format
        ConflictingOptionError: If mutually exclusive fields are both set
        MissingDependencyError: If a field requires another unset field
    """
    if props is None:
        props = VSCodeServerProps()

    values = {}
    for prop in fields(ResolvedVSCodeServerProps):
        value = getattr(props, prop.name)
        if value is None:
            value = DEFAULTS.get(prop.name)
        values[prop.name] = value

    values["additional_instance_role_policies"] = _statements_to_json(
        values["additional_instance_role_policies"]
    )

    _validate_values(values)

    values["instance_volume_size"] = int(values["instance_volume_size"])
    values["dev_server_port"] = int(values["dev_server_port"])
    values["additional_tags"] = dict(values["additional_tags"])
    values["additional_instance_role_policies"] = tuple(
        dict(statement) for statement in values["additional_instance_role_policies"]
    )

    _validate_domain_options(values)

    resolved = ResolvedVSCodeServerProps(**values)
    logger.debug(
        f"Resolved props for {resolved.instance_name}: "
        f"{resolved.instance_type_name}, "
        f"{resolved.instance_cpu_architecture.name}/"
        f"{resolved.instance_operating_system.name}"
    )
    return resolved


def _validate_values(values: Dict[str, Any]) -> None:
    """Validate the type and format of every resolved value."""
    values["instance_cpu_architecture"] = LinuxArchitectureType.parse(
        values["instance_cpu_architecture"], "instanceCpuArchitecture"
    )
    values["instance_operating_system"] = LinuxFlavorType.parse(
        values["instance_operating_system"], "instanceOperatingSystem"
    )

    for name in (
        "vscode_user",
        "instance_name",
        "home_folder",
        "dev_server_base_path",
    ):
        validate_string(FIELD_NAMES[name], values[name])

    if values["vscode_password"] is not None:
        validate_string("vscodePassword", values["vscode_password"])

    for name in ("domain_name", "hosted_zone_id", "certificate_arn"):
        if values[name] is not None:
            validate_non_empty_string(FIELD_NAMES[name], values[name])

    for name in ("instance_class", "instance_size"):
        validate_descriptor(FIELD_NAMES[name], values[name])

    validate_non_negative_int("instanceVolumeSize", values["instance_volume_size"])
    validate_port("devServerPort", values["dev_server_port"])
    validate_bool("autoCreateCertificate", values["auto_create_certificate"])

    validate_tags("additionalTags", values["additional_tags"])
    validate_policy_statements(
        "additionalInstanceRolePolicies",
        values["additional_instance_role_policies"],
    )


def _validate_domain_options(values: Dict[str, Any]) -> None:
    """Check the rules between the custom domain and certificate fields."""
    domain_name = values["domain_name"]
    hosted_zone_id = values["hosted_zone_id"]
    certificate_arn = values["certificate_arn"]
    auto_create_certificate = values["auto_create_certificate"]

    if certificate_arn and auto_create_certificate:
        raise ConflictingOptionError(
            "Cannot specify both certificateArn and autoCreateCertificate. Choose one.",
            fields=["certificateArn", "autoCreateCertificate"],
        )

    if auto_create_certificate and not (hosted_zone_id or domain_name):
        raise MissingDependencyError(
            "autoCreateCertificate requires hostedZoneId or domainName",
            fields=["autoCreateCertificate", "hostedZoneId", "domainName"],
        )

    if domain_name and not (certificate_arn or auto_create_certificate):
        raise MissingDependencyError(
            "When domainName is provided, either certificateArn or "
            "autoCreateCertificate must be specified",
            fields=["domainName", "certificateArn", "autoCreateCertificate"],
        )

    if certificate_arn and not domain_name:
        raise MissingDependencyError(
            "certificateArn can only be used with domainName",
            fields=["certificateArn", "domainName"],
        )

    if hosted_zone_id and not (domain_name or auto_create_certificate):
        raise MissingDependencyError(
            "hostedZoneId can only be used with domainName or autoCreateCertificate",
            fields=["hostedZoneId", "domainName"],
        )


def _serialize_value(value: Any) -> Any:
    if isinstance(value, (LinuxArchitectureType, LinuxFlavorType)):
        return value.name
    if isinstance(value, tuple):
        return [dict(item) for item in _statements_to_json(value)]
    if isinstance(value, Mapping):
        return dict(value)
    return value


def _statements_to_json(value: Any) -> Any:
    """Render PolicyStatement objects as statement JSON; other entries pass through."""
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return tuple(
            statement.to_statement_json() if isinstance(statement, iam.PolicyStatement) else statement
            for statement in value
        )
    return value
