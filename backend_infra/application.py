"""Assemble every stack of a provisioning run for the active environment."""
from aws_cdk import App, Aspects, Environment, Stack, Tags
from cdk_nag import AwsSolutionsChecks, NagPackSuppression, NagSuppressions

import common.constants as constants
from backend_infra.lambda_stack import LambdaStack
from backend_infra.rds_stack import RdsStack
from common import environment
from common.log import logger
from common.properties import ConfigurationSource, load_active_configuration, load_properties
from common.resource_naming import compute_resource_name
from networking.networking_stack import NetworkingStack


def build_application(
    app: App, path_level: str = constants.PROJECT_ROOT_PREFIX
) -> list[Stack]:
    """Define the network, RDS and Lambda stacks of ``app``.

    Raises:
        InvalidEnvironmentError: the ``env`` context value is missing or unknown.
        ConfigurationError: a properties file or a required key is missing.
    """
    environment.initialize_from_app(app)
    config = load_active_configuration(path_level)

    env = Environment(
        account=config.get(constants.ACCOUNT_KEY),
        region=config.get(constants.REGION_KEY),
    )

    networking_stack = NetworkingStack(
        app,
        compute_resource_name(config.get(constants.NETWORK_STACK_KEY), path_level),
        config=config,
        env=env,
    )
    rds_stack = RdsStack(
        app,
        compute_resource_name(config.get(constants.RDS_STACK_KEY), path_level),
        config=config,
        vpc=networking_stack.vpc,
        env=env,
    )
    lambda_stack = LambdaStack(
        app,
        compute_resource_name(config.get(constants.LAMBDA_STACK_KEY), path_level),
        config=config,
        env=env,
    )
    stacks = [networking_stack, rds_stack, lambda_stack]

    apply_tagging(app, config)
    apply_suppressions(app, stacks, config)

    logger.info(
        "Application defined",
        extra={
            "environment": config.environment,
            "stacks": [stack.stack_name for stack in stacks],
        },
    )
    return stacks


def apply_tagging(app: App, config: ConfigurationSource) -> None:
    tagging = load_properties(config.resolve_path(constants.TAGGING_PATH_KEY))
    tags = Tags.of(app)
    for key, value in tagging.properties.items():
        tags.add(key, value)
    tags.add("Environment", config.environment)
    tags.add("ArchitectureType", config.get(constants.ARCHITECTURE_TYPE_KEY))


def apply_suppressions(
    app: App, stacks: list[Stack], config: ConfigurationSource
) -> None:
    """Run the AwsSolutions checks, silencing the rules listed in the suppressions file."""
    suppressions = load_properties(config.resolve_path(constants.SUPPRESSIONS_PATH_KEY))
    Aspects.of(app).add(AwsSolutionsChecks(verbose=True))
    nag_suppressions = [
        NagPackSuppression(id=rule_id, reason=reason)
        for rule_id, reason in suppressions.properties.items()
    ]
    if not nag_suppressions:
        return
    for stack in stacks:
        NagSuppressions.add_stack_suppressions(stack, nag_suppressions)
