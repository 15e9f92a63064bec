"""Main CDK stack for the VSCode Server application."""

from typing import Optional

from aws_cdk import (
    Stack,
    Tags,
)
from cdk_nag import NagSuppressions
from constructs import Construct

from .config import COMMON_CONFIG, get_config
from .props import VSCodeServerProps
from .vscode_server_construct import VSCodeServer


class VSCodeServerStack(Stack):
    """VSCode Server CDK Stack."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        environment: str,
        server_props: Optional[VSCodeServerProps] = None,
        **kwargs
    ) -> None:
        """Initialize the VSCode Server Stack.

        Args:
            scope: CDK app scope
            construct_id: Unique identifier for this stack
            environment: Environment name (dev, workshop)
            server_props: Overrides the environment's server props
            **kwargs: Additional stack properties
        """
        super().__init__(scope, construct_id, **kwargs)

        self.environment = environment
        self.config = get_config(environment)

        # Add tags to all resources
        Tags.of(self).add("Project", COMMON_CONFIG['project_name'])
        Tags.of(self).add("Environment", environment)
        Tags.of(self).add("ManagedBy", "CDK")

        self.server = VSCodeServer(
            self,
            "VSCodeServer",
            server_props or self.config.server_props,
        )

        NagSuppressions.add_stack_suppressions(
            self,
            [
                {
                    "id": "AwsSolutions-IAM4",
                    "reason": "AWS managed policies are acceptable for Lambda basic execution",
                },
                {
                    "id": "AwsSolutions-L1",
                    "reason": "Custom resource runtimes are managed by CDK",
                },
            ],
        )
