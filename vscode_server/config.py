"""Configuration management for the VSCode Server application."""

from pathlib import Path
from typing import Dict, Optional
from dataclasses import dataclass

from .enums import LinuxArchitectureType, LinuxFlavorType
from .props import VSCodeServerProps

# Repository root; Lambda assets are resolved from here
PROJECT_ROOT = Path(__file__).resolve().parent.parent


@dataclass
class EnvironmentConfig:
    """Environment-specific configuration."""

    # Environment name
    name: str

    # AWS region (None falls back to CDK_DEFAULT_REGION)
    region: Optional[str]

    # Run the cdk-nag AwsSolutions pack on synth
    enable_cdk_nag: bool

    # Construct properties used for this environment
    server_props: VSCodeServerProps


# Environment configurations
ENVIRONMENTS: Dict[str, EnvironmentConfig] = {
    'dev': EnvironmentConfig(
        name='dev',
        region=None,
        enable_cdk_nag=True,
        server_props=VSCodeServerProps(
            instance_size='large',
            instance_volume_size=20,  # Smaller disk in dev to save costs
        ),
    ),
    'workshop': EnvironmentConfig(
        name='workshop',
        region='us-east-1',
        enable_cdk_nag=True,
        server_props=VSCodeServerProps(
            instance_cpu_architecture=LinuxArchitectureType.ARM,
            instance_operating_system=LinuxFlavorType.UBUNTU_24,
            additional_tags={'purpose': 'workshop'},
        ),
    ),
}


def get_config(environment: str) -> EnvironmentConfig:
    """Get configuration for environment.

    Args:
        environment: Environment name (dev, workshop)

    Returns:
        EnvironmentConfig for the environment

    Raises:
        ValueError: If environment not found
    """
    if environment not in ENVIRONMENTS:
        raise ValueError(
            f"Unknown environment: {environment}. "
            f"Valid environments: {list(ENVIRONMENTS.keys())}"
        )
    return ENVIRONMENTS[environment]


# Common configuration (not environment-specific)
COMMON_CONFIG = {
    'project_name': 'VSCodeServer',
    'default_tags': {'app': 'vscode-server'},
    'password_length': 16,
    'password_key': 'password',
    'secret_retriever_timeout_seconds': 10,
    'secret_retriever_memory_mb': 128,
    'secret_retriever_asset': str(PROJECT_ROOT / 'lambda_functions' / 'secret_retriever'),
    'lambda_layer_asset': str(PROJECT_ROOT / 'lambda_layer'),
}
