#!/usr/bin/env python3
import json
import os
import aws_cdk as cdk
from cdk_nag import AwsSolutionsChecks
from vscode_server.config import get_config
from vscode_server.props import VSCodeServerProps
from vscode_server.vscode_server_stack import VSCodeServerStack

app = cdk.App()

# Get environment from context or default to 'dev'
env_name = app.node.try_get_context("environment") or "dev"
config = get_config(env_name)

# Optional props override, e.g. -c vscode='{"instanceSize": "2xlarge"}'
server_props = None
props_context = app.node.try_get_context("vscode")
if props_context:
    if isinstance(props_context, str):
        props_context = json.loads(props_context)
    server_props = VSCodeServerProps.from_dict(props_context)

# AWS environment configuration
env = cdk.Environment(
    account=os.environ.get("CDK_DEFAULT_ACCOUNT"),
    region=config.region or os.environ.get("CDK_DEFAULT_REGION", "us-east-1")
)

stack = VSCodeServerStack(
    app,
    f"VSCodeServerStack-{env_name}",
    env=env,
    environment=env_name,
    server_props=server_props,
    description=f"VSCode Server - {env_name} environment"
)

# Add CDK Nag security checks (optional, can be disabled with context)
if config.enable_cdk_nag and app.node.try_get_context("enable_cdk_nag") != "false":
    cdk.Aspects.of(app).add(AwsSolutionsChecks(verbose=True))

app.synth()
