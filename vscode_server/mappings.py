"""SSM parameters for the machine image of each Linux architecture and flavor.

Generated from:
    aws ssm get-parameters-by-path --path "/aws/service/canonical/ubuntu/" --recursive
    aws ssm get-parameters-by-path --path "/aws/service/ami-amazon-linux-latest/" --recursive
"""

from typing import Dict

from .enums import LinuxArchitectureType, LinuxFlavorType
from .exceptions import InvalidOptionError

AMI_SSM_PARAMETERS: Dict[str, str] = {
    "arm-ubuntu22": "/aws/service/canonical/ubuntu/server/jammy/stable/current/arm64/hvm/ebs-gp2/ami-id",
    "arm-ubuntu24": "/aws/service/canonical/ubuntu/server/noble/stable/current/arm64/hvm/ebs-gp3/ami-id",
    "arm-ubuntu25": "/aws/service/canonical/ubuntu/server/plucky/stable/current/arm64/hvm/ebs-gp3/ami-id",
    "arm-al2023": "/aws/service/ami-amazon-linux-latest/al2023-ami-kernel-default-arm64",
    "amd64-ubuntu22": "/aws/service/canonical/ubuntu/server/jammy/stable/current/amd64/hvm/ebs-gp2/ami-id",
    "amd64-ubuntu24": "/aws/service/canonical/ubuntu/server/noble/stable/current/amd64/hvm/ebs-gp3/ami-id",
    "amd64-ubuntu25": "/aws/service/canonical/ubuntu/server/plucky/stable/current/amd64/hvm/ebs-gp3/ami-id",
    "amd64-al2023": "/aws/service/ami-amazon-linux-latest/al2023-ami-kernel-default-x86_64",
}


def get_ami_ssm_parameter(
    architecture: LinuxArchitectureType,
    flavor: LinuxFlavorType
) -> str:
    """Get the SSM parameter holding the AMI id.

    Args:
        architecture: CPU architecture
        flavor: Linux flavor

    Returns:
        SSM parameter name

    Raises:
        InvalidOptionError: If the combination is not supported
    """
    key = f"{architecture.slug}-{flavor.slug}"
    if key not in AMI_SSM_PARAMETERS:
        raise InvalidOptionError(
            f"Linux architecture '{architecture.name}' and flavor "
            f"'{flavor.name}' not supported",
            fields=["instanceCpuArchitecture", "instanceOperatingSystem"],
        )
    return AMI_SSM_PARAMETERS[key]
