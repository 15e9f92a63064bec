"""Closed option types for the VSCode Server instance."""

from enum import Enum
from typing import Any

from .exceptions import InvalidOptionError


class _OptionEnum(Enum):
    """Enum whose members are parsed by exact member name."""

    @classmethod
    def parse(cls, value: Any, field: str = ""):
        """Parse a value into a member of this enum.

        Args:
            value: Enum member or its exact (case-sensitive) name
            field: Field name reported on failure

        Returns:
            The matching enum member

        Raises:
            InvalidOptionError: If value is not a member name
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value in cls.__members__:
            return cls.__members__[value]
        field = field or cls.__name__
        raise InvalidOptionError(
            f"Invalid value {value!r} for {field}. "
            f"Valid values: {', '.join(cls.__members__)}",
            fields=[field],
        )

    @property
    def slug(self) -> str:
        """Lowercase identifier used in image lookups."""
        return SLUGS[self]


class LinuxArchitectureType(_OptionEnum):
    """The architecture of the cpu you want to run vscode server on."""

    ARM = "ARM"
    AMD64 = "AMD64"


class LinuxFlavorType(_OptionEnum):
    """The flavor of linux you want to run vscode server on."""

    UBUNTU_22 = "UBUNTU_22"
    UBUNTU_24 = "UBUNTU_24"
    AMAZON_LINUX_2023 = "AMAZON_LINUX_2023"


# Keys of AMI_SSM_PARAMETERS are built from these
SLUGS = {
    LinuxArchitectureType.ARM: "arm",
    LinuxArchitectureType.AMD64: "amd64",
    LinuxFlavorType.UBUNTU_22: "ubuntu22",
    LinuxFlavorType.UBUNTU_24: "ubuntu24",
    LinuxFlavorType.AMAZON_LINUX_2023: "al2023",
}
