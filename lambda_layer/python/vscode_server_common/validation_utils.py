"""Validation utilities for custom resource events."""

from typing import List, Dict, Any
from .exceptions import ValidationError

REQUEST_TYPES = ["Create", "Update", "Delete"]


def validate_custom_resource_event(
    event: Dict[str, Any],
    required_properties: List[str]
) -> None:
    """Validate a CloudFormation custom resource event.

    Args:
        event: Custom resource event from the provider framework
        required_properties: ResourceProperties keys required for Create/Update

    Raises:
        ValidationError: If the request type or a required property is missing
    """
    request_type = event.get("RequestType")
    if request_type not in REQUEST_TYPES:
        raise ValidationError(
            f"Invalid RequestType '{request_type}'. "
            f"Valid request types: {', '.join(REQUEST_TYPES)}"
        )

    if request_type == "Delete":
        return

    properties = event.get("ResourceProperties") or {}
    missing = [name for name in required_properties if not properties.get(name)]
    if missing:
        raise ValidationError(
            f"Custom resource event missing required properties: {', '.join(missing)}"
        )


def validate_secret_arn(secret_arn: str) -> None:
    """Validate Secrets Manager secret ARN format.

    Args:
        secret_arn: Secret ARN

    Raises:
        ValidationError: If the ARN is not a Secrets Manager secret ARN
    """
    if not secret_arn:
        raise ValidationError("Secret ARN cannot be empty")

    parts = secret_arn.split(":")
    if len(parts) < 7 or parts[0] != "arn" or parts[2] != "secretsmanager" or parts[5] != "secret":
        raise ValidationError(f"Invalid secret ARN: {secret_arn}")
