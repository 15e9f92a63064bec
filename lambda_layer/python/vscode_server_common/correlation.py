"""Correlation ID utilities for custom resource request tracing."""

import uuid
from typing import Optional


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def extract_correlation_id(event: dict) -> Optional[str]:
    """Extract correlation ID from a custom resource event.

    The CloudFormation RequestId is preferred; the physical resource id
    ties Update and Delete requests back to the resource.

    Args:
        event: Custom resource event dictionary

    Returns:
        Correlation ID if present, None otherwise
    """
    for key in ("correlation_id", "RequestId", "PhysicalResourceId"):
        if event.get(key):
            return event[key]
    return None


def get_or_create_correlation_id(event: dict) -> str:
    """Get existing correlation ID or create new one.

    Args:
        event: Custom resource event dictionary

    Returns:
        Correlation ID string
    """
    return extract_correlation_id(event) or generate_correlation_id()
