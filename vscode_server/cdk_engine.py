"""CDK construction engine for the VSCodeServer construct."""

import json
import logging
from typing import Optional, Tuple

from aws_cdk import (
    CfnOutput,
    CfnParameter,
    Tags,
    aws_ec2 as ec2,
    aws_iam as iam,
    aws_secretsmanager as secretsmanager,
)
from cdk_nag import NagSuppressions
from constructs import Construct

from .config import COMMON_CONFIG
from .engine import ServerEngine, ServerHandle
from .props import ResolvedVSCodeServerProps
from .secret_retriever_construct import SecretRetrieverConstruct

logger = logging.getLogger(__name__)


class CdkServerEngine(ServerEngine):
    """Engine that wires the VSCodeServer outputs with aws-cdk-lib.

    The server instance, its distribution and the Nginx setup are owned by
    the stack the construct is placed in. This engine creates the password
    secret, the instance role and the stack outputs, and points the default
    domain at the distribution domain the stack owner supplies.
    """

    def __init__(self, default_domain: Optional[str] = None):
        """Initialize CDK engine.

        Args:
            default_domain: Domain used when no custom domain is configured.
                A CloudFormation parameter is created when omitted.
        """
        self.default_domain = default_domain

    def build(
        self,
        scope: Construct,
        props: ResolvedVSCodeServerProps
    ) -> ServerHandle:
        logger.info(
            f"Building VSCodeServer {scope.node.path} "
            f"({props.instance_type_name}, {props.instance_operating_system.name})"
        )

        self._apply_tags(scope, props)

        password, secret, retriever = self._resolve_password(scope, props)
        instance_role = self._create_instance_role(scope, props)

        domain_name = props.domain_name or self._default_domain_name(scope)
        url = f"https://{domain_name}/?folder={props.home_folder}"

        CfnOutput(
            scope,
            "domainName",
            description="The domain name of the distribution",
            value=domain_name,
        )

        CfnOutput(
            scope,
            "url",
            description="The URL to open VS Code in the home folder",
            value=url,
        )

        CfnOutput(
            scope,
            "password",
            description="The password for the VSCode server",
            value=password,
        )

        return ServerHandle(
            domain_name=domain_name,
            url=url,
            password=password,
            scope=scope,
            resources={
                "instance_role": instance_role,
                "instance_type": ec2.InstanceType(props.instance_type_name),
                "machine_image": ec2.MachineImage.from_ssm_parameter(
                    props.ami_parameter_name,
                    os=ec2.OperatingSystemType.LINUX,
                ),
                "password_secret": secret,
                "secret_retriever": retriever,
            },
        )

    def _apply_tags(self, scope: Construct, props: ResolvedVSCodeServerProps) -> None:
        """Tag every resource in the construct; user tags win."""
        merged_tags = {**COMMON_CONFIG['default_tags'], **props.additional_tags}
        for key, value in merged_tags.items():
            Tags.of(scope).add(key, value)

    def _resolve_password(
        self,
        scope: Construct,
        props: ResolvedVSCodeServerProps
    ) -> Tuple[str, Optional[secretsmanager.Secret], Optional[SecretRetrieverConstruct]]:
        """Use the configured password or generate one in Secrets Manager.

        Returns:
            Password (plain value or deploy-time token), secret and retriever
        """
        if not props.needs_generated_password:
            return props.vscode_password, None, None

        secret = secretsmanager.Secret(
            scope,
            "password-secret",
            generate_secret_string=secretsmanager.SecretStringGenerator(
                password_length=COMMON_CONFIG['password_length'],
                secret_string_template=json.dumps({"username": props.vscode_user}),
                exclude_punctuation=True,
                include_space=False,
                generate_string_key=COMMON_CONFIG['password_key'],
            ),
        )

        NagSuppressions.add_resource_suppressions(
            secret,
            [
                {
                    "id": "AwsSolutions-SMG4",
                    "reason": "For this tmp vs code server we do not need password rotation",
                },
            ],
            True,
        )

        retriever = SecretRetrieverConstruct(
            scope,
            "SecretRetriever",
            secret_arn=secret.secret_arn,
        )

        return retriever.password, secret, retriever

    def _create_instance_role(
        self,
        scope: Construct,
        props: ResolvedVSCodeServerProps
    ) -> iam.Role:
        """Create the role the server instance runs with.

        Returns:
            IAM Role for the server instance
        """
        statements = [
            iam.PolicyStatement.from_json(statement)
            for statement in props.additional_instance_role_policies
        ]

        inline_policies = None
        if statements:
            inline_policies = {
                "VSCodeInstanceInlinePolicy": iam.PolicyDocument(statements=statements)
            }

        role = iam.Role(
            scope,
            "server-instance-role",
            assumed_by=iam.CompositePrincipal(
                iam.ServicePrincipal("ec2.amazonaws.com"),
                iam.ServicePrincipal("ssm.amazonaws.com"),
            ),
            description=f"Role for the {props.instance_name} instance",
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "AmazonSSMManagedInstanceCore"
                ),
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "CloudWatchAgentServerPolicy"
                ),
            ],
            inline_policies=inline_policies,
        )

        NagSuppressions.add_resource_suppressions(
            role,
            [
                {
                    "id": "AwsSolutions-IAM4",
                    "reason": "For this tmp role we do not need to restrict managed policies",
                },
                {
                    "id": "AwsSolutions-IAM5",
                    "reason": "For this tmp role the wildcards are fine",
                },
            ],
            True,
        )

        return role

    def _default_domain_name(self, scope: Construct) -> str:
        if self.default_domain:
            return self.default_domain

        parameter = CfnParameter(
            scope,
            "DefaultDomainName",
            type="String",
            description="Domain name of the distribution in front of the VSCode server",
        )
        return parameter.value_as_string
