from attrs import define, field
from aws_cdk import RemovalPolicy, Stack, aws_logs as logs

import common.constants as constants
from common.errors import ConfigurationError
from common.properties import ConfigurationSource
from common.resource_naming import format_resource_name


@define(slots=True, frozen=True)
class StackContext:
    scope: Stack
    config: ConfigurationSource
    namespace: str = field(init=False)
    env: str = field(init=False)

    def __attrs_post_init__(self) -> None:
        if not self.config.environment:
            raise ConfigurationError(
                f"Configuration {self.config.path} was not loaded for an environment"
            )
        object.__setattr__(self, "namespace", self.config.get(constants.NAMESPACE_KEY))
        object.__setattr__(self, "env", self.config.environment)

    @property
    def aws_account_id(self) -> str:
        return Stack.of(self.scope).account

    @property
    def aws_region(self) -> str:
        return Stack.of(self.scope).region

    # ---------- layers ----------
    def build_power_tools_layer_arn(self) -> str:
        region = self.aws_region
        if not region:
            raise ValueError(
                "AWS region is not set, unable to resolve Power Tools Layer ARN"
            )
        return constants.POWER_TOOLS_LAYER.format(
            region=region,
            runtime=constants.POWER_TOOLS_PYTHON_RUNTIME,
            version=constants.POWER_TOOLS_VERSION,
            lambda_layer_account=constants.POWER_TOOLS_LAMBDA_LAYER_ACCOUNT,
            power_tools_type=constants.POWER_TOOLS_LAMBDA_LAYER_NAME,
            architecture=constants.POWER_TOOLS_ARCHITECTURE,
        )

    # ---------- naming ----------
    def build_resource_name(self, logical_name: str) -> str:
        """Build the physical resource name.

        Examples:
            - namespace=pipefy, env=DEV: api-access-logs -> pipefy-api-access-logs-dev
        """
        return format_resource_name(self.namespace, logical_name, self.env)

    def build_resource_id(self, *parts: str) -> str:
        """Build a construct id from dash separated parts.

        Examples:
            - ("export-tech-process", "api") -> ExportTechProcessApi
        """
        words = (word for part in parts for word in part.split("-") if word)
        return "".join(word.capitalize() for word in words)

    def build_log_group(
        self, logical_name: str, retention: logs.RetentionDays
    ) -> logs.LogGroup:
        return logs.LogGroup(
            self.scope,
            self.build_resource_id(logical_name, "log-group"),
            log_group_name=self.build_resource_name(logical_name),
            removal_policy=RemovalPolicy.DESTROY,
            retention=retention,
        )
