"""Shared pytest configuration."""

import os

# boto3 clients are created at import time in the Lambda handlers
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-east-1')
os.environ.setdefault('AWS_XRAY_SDK_ENABLED', 'false')
