from aws_cdk import (
    Stack,
    aws_apigateway as apigw,
    aws_lambda as _lambda,
    aws_wafv2 as wafv2,
)
from constructs import Construct

import common.constants as constants
from common.log import logger
from common.properties import ConfigurationSource
from common.stack_context import StackContext


class LambdaStack(Stack):
    """Lambda functions exposed through API-key protected REST APIs behind WAF."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        config: ConfigurationSource,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)
        self.context = StackContext(scope=self, config=config)

        # Configure Lambda code and layers
        self.code = _lambda.Code.from_asset(constants.LAMBDA_SRC)
        self.layers = [
            _lambda.LayerVersion.from_layer_version_arn(
                self,
                self.context.build_resource_id("lambda-power-tools-layer"),
                layer_version_arn=self.context.build_power_tools_layer_arn(),
            ),
        ]

        # Log group for the API access logs
        self.access_log_group = self.context.build_log_group(
            "api-access-logs", retention=constants.ACCESS_LOG_RETENTION
        )

        # Api key used for the api gateway authentication
        self.api_key = self._build_api_key()

        # WAF ACL shared by every REST API
        self.web_acl = self._build_web_acl()

        self.functions: dict[str, _lambda.Function] = {}
        self.rest_apis: dict[str, apigw.LambdaRestApi] = {}
        for definition in constants.API_FUNCTIONS:
            function = self._build_function(definition)
            rest_api = self._build_rest_api(definition, function)
            self._associate_web_acl(definition, rest_api)
            self.functions[definition.name] = function
            self.rest_apis[definition.name] = rest_api

        logger.info(
            "Lambda stack defined",
            extra={"stack": construct_id, "functions": list(self.functions)},
        )

    # Resource creation

    def _build_api_key(self) -> apigw.ApiKey:
        return apigw.ApiKey(
            self,
            self.context.build_resource_id("api-key"),
            api_key_name=self.context.build_resource_name("api-key"),
            description="API Key for the report LambdaRestApis",
            enabled=True,
        )

    def _build_web_acl(self) -> wafv2.CfnWebACL:
        name = self.context.build_resource_name("web-acl")
        return wafv2.CfnWebACL(
            self,
            self.context.build_resource_id("web-acl"),
            name=name,
            description="WebACL for the report API Gateways",
            scope=constants.WAF_SCOPE,
            default_action=wafv2.CfnWebACL.DefaultActionProperty(block={}),
            visibility_config=wafv2.CfnWebACL.VisibilityConfigProperty(
                cloud_watch_metrics_enabled=True,
                metric_name=name,
                sampled_requests_enabled=True,
            ),
            rules=[],
        )

    def _build_function(
        self, definition: constants.ApiFunctionDefinition
    ) -> _lambda.Function:
        function_name = self.context.build_resource_name(definition.name)
        return _lambda.Function(
            self,
            self.context.build_resource_id(definition.name, "function"),
            function_name=function_name,
            description=definition.description,
            runtime=constants.PYTHON_RUNTIME,
            architecture=constants.DEFAULT_ARCHITECTURE,
            handler=constants.API_FUNCTION_HANDLER,
            code=self.code,
            memory_size=constants.API_FUNCTION_MEMORY_SIZE,
            layers=self.layers,
            tracing=_lambda.Tracing.ACTIVE,
            environment={
                "LOG_LEVEL": "INFO",
                "REPORT_NAME": definition.name,
                "ENVIRONMENT": self.context.env,
                "POWERTOOLS_SERVICE_NAME": function_name,
            },
        )

    def _build_rest_api(
        self,
        definition: constants.ApiFunctionDefinition,
        function: _lambda.Function,
    ) -> apigw.LambdaRestApi:
        """Create the REST API proxying to ``function``, keyed by the shared API key."""
        rest_api = apigw.LambdaRestApi(
            self,
            self.context.build_resource_id(definition.name, "api"),
            rest_api_name=self.context.build_resource_name(f"{definition.name}-api"),
            handler=function,
            proxy=True,
            default_method_options=apigw.MethodOptions(
                api_key_required=True,
            ),
            deploy_options=apigw.StageOptions(
                stage_name=constants.API_STAGE_NAME,
                access_log_destination=apigw.LogGroupLogDestination(
                    self.access_log_group
                ),
                access_log_format=apigw.AccessLogFormat.json_with_standard_fields(
                    caller=True,
                    http_method=True,
                    ip=True,
                    protocol=True,
                    request_time=True,
                    resource_path=True,
                    response_length=True,
                    status=True,
                    user=True,
                ),
                logging_level=apigw.MethodLoggingLevel.INFO,
            ),
        )
        usage_plan = rest_api.add_usage_plan(
            self.context.build_resource_id(definition.name, "usage-plan"),
            name=self.context.build_resource_name(f"{definition.name}-usage-plan"),
            api_stages=[
                apigw.UsagePlanPerApiStage(api=rest_api, stage=rest_api.deployment_stage)
            ],
        )
        usage_plan.add_api_key(self.api_key)

        # The API key must exist before the REST API is created
        rest_api.node.add_dependency(self.api_key)
        return rest_api

    def _associate_web_acl(
        self,
        definition: constants.ApiFunctionDefinition,
        rest_api: apigw.LambdaRestApi,
    ) -> wafv2.CfnWebACLAssociation:
        association = wafv2.CfnWebACLAssociation(
            self,
            self.context.build_resource_id(definition.name, "web-acl-association"),
            web_acl_arn=self.web_acl.attr_arn,
            resource_arn=rest_api.deployment_stage.stage_arn,
        )
        # The stage has to be deployed before WAF can be attached to it
        association.node.add_dependency(rest_api)
        return association

