"""
Secret Retriever Construct

Custom resource that reads a generated Secrets Manager secret at deploy time
and exposes its password as a CloudFormation attribute.
"""

from aws_cdk import (
    CustomResource,
    Duration,
    aws_iam as iam,
    aws_lambda as lambda_,
    custom_resources as cr,
)
from cdk_nag import NagSuppressions
from constructs import Construct

from .config import COMMON_CONFIG


class SecretRetrieverConstruct(Construct):
    """Construct for retrieving a generated secret during deployment."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        secret_arn: str,
        **kwargs
    ) -> None:
        """
        Initialize Secret Retriever Construct.

        Args:
            scope: CDK scope
            construct_id: Construct ID
            secret_arn: ARN of the secret to read
        """
        super().__init__(scope, construct_id, **kwargs)

        self.secret_arn = secret_arn

        self.layer = lambda_.LayerVersion(
            self,
            'CommonLayer',
            code=lambda_.Code.from_asset(COMMON_CONFIG['lambda_layer_asset']),
            compatible_runtimes=[lambda_.Runtime.PYTHON_3_12],
            description='Shared utilities for VSCode Server Lambda functions',
        )

        self.on_event_function = lambda_.Function(
            self,
            'SecretRetrieverOnEventHandler',
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler='handler.handler',
            code=lambda_.Code.from_asset(COMMON_CONFIG['secret_retriever_asset']),
            timeout=Duration.seconds(COMMON_CONFIG['secret_retriever_timeout_seconds']),
            memory_size=COMMON_CONFIG['secret_retriever_memory_mb'],
            layers=[self.layer],
            tracing=lambda_.Tracing.ACTIVE,
            description='Retrieves the generated VSCode Server password',
        )

        self.on_event_function.add_to_role_policy(
            iam.PolicyStatement(
                sid='SecretsManagerReadAccess',
                effect=iam.Effect.ALLOW,
                actions=['secretsmanager:GetSecretValue'],
                resources=[secret_arn],
            )
        )

        NagSuppressions.add_resource_suppressions(
            self.on_event_function,
            [
                {
                    'id': 'AwsSolutions-IAM4',
                    'reason': 'AWS managed policies are acceptable for Lambda basic execution',
                },
                {
                    'id': 'AwsSolutions-IAM5',
                    'reason': 'Wildcard permissions required for X-Ray tracing',
                },
                {
                    'id': 'AwsSolutions-L1',
                    'reason': 'Runtime is pinned and updated together with the layer',
                },
            ],
            True,
        )

        self.provider = cr.Provider(
            self,
            'SecretRetrieveProvider',
            on_event_handler=self.on_event_function,
        )

        NagSuppressions.add_resource_suppressions(
            self.provider,
            [
                {
                    'id': 'AwsSolutions-IAM4',
                    'reason': 'For this provider we do not need to restrict managed policies',
                },
                {
                    'id': 'AwsSolutions-IAM5',
                    'reason': 'For this provider wildcards are fine',
                },
                {
                    'id': 'AwsSolutions-L1',
                    'reason': 'Provider framework runtime is managed by CDK',
                },
            ],
            True,
        )

        self.resource = CustomResource(
            self,
            'SecretRetrieverCustomResource',
            service_token=self.provider.service_token,
            properties={
                'SecretArn': secret_arn,
            },
        )

        # Tokens, resolved by CloudFormation at deploy time
        self.password = self.resource.get_att_string('secretPasswordValue')
        self.username = self.resource.get_att_string('secretUsernameValue')
