"""
Secret Retriever Lambda Function

Custom resource handler that reads the generated VSCode Server password from
AWS Secrets Manager and returns it as resource attributes.
"""

import json
import boto3
from typing import Dict, Any
from aws_xray_sdk.core import xray_recorder
from vscode_server_common.logging_utils import get_logger
from vscode_server_common.correlation import get_or_create_correlation_id
from vscode_server_common.exceptions import SecretRetrievalError
from vscode_server_common.retry_utils import exponential_backoff_retry, raise_for_throttling
from vscode_server_common.validation_utils import (
    validate_custom_resource_event,
    validate_secret_arn
)

# Initialize AWS clients
secrets_client = boto3.client('secretsmanager')


@xray_recorder.capture('lambda_handler')
def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for the secret retriever custom resource.

    Args:
        event: Custom resource event from the provider framework
        context: Lambda context

    Returns:
        Provider framework response; Data holds the secret attributes
    """
    correlation_id = get_or_create_correlation_id(event)
    log = get_logger(__name__, correlation_id)

    log.info('Secret Retriever invoked', event=event)

    validate_custom_resource_event(event, ['SecretArn'])

    if event['RequestType'] == 'Delete':
        # Nothing to clean up, the secret is owned by the stack
        return {}

    secret_arn = event['ResourceProperties']['SecretArn']
    validate_secret_arn(secret_arn)

    secret = retrieve_secret(secret_arn)

    log.info('Secret retrieved', secret_arn=secret_arn)

    return {
        'Data': {
            'secretUsernameValue': secret.get('username', ''),
            'secretPasswordValue': secret['password'],
        }
    }


@exponential_backoff_retry(max_attempts=3)
@raise_for_throttling
def get_secret_string(secret_arn: str) -> str:
    """Fetch the raw secret string.

    Args:
        secret_arn: ARN of the secret

    Returns:
        SecretString of the current version
    """
    response = secrets_client.get_secret_value(SecretId=secret_arn)
    return response['SecretString']


def retrieve_secret(secret_arn: str) -> Dict[str, Any]:
    """Retrieve and parse the generated secret.

    Args:
        secret_arn: ARN of the secret

    Returns:
        Secret JSON with username and password

    Raises:
        SecretRetrievalError: If the secret is not JSON or has no password
    """
    secret_string = get_secret_string(secret_arn)

    try:
        secret = json.loads(secret_string)
    except json.JSONDecodeError as e:
        raise SecretRetrievalError(f'Secret {secret_arn} is not valid JSON') from e

    if not isinstance(secret, dict) or not secret.get('password'):
        raise SecretRetrievalError(f'Secret {secret_arn} has no password')

    return secret
