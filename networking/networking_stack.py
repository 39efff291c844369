from aws_cdk import CfnOutput, Stack, aws_ec2 as ec2, aws_ssm as ssm
from constructs import Construct

from common import constants
from common.properties import ConfigurationSource
from common.stack_context import StackContext
from networking.endpoints import add_aws_service_endpoint


class NetworkingStack(Stack):

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        config: ConfigurationSource,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)
        self.context = StackContext(scope=self, config=config)

        self.vpc = self.create_vpc()
        self.vpc_endpoint()
        self.create_vpc_id_ssm_parameter()

        CfnOutput(self, "VpcId", value=self.vpc.vpc_id)

    def create_vpc_id_ssm_parameter(self) -> ssm.StringParameter:
        """Persist vpc id in SSM"""
        parameter_name = self.context.build_resource_name("vpc-id")
        return ssm.StringParameter(
            self,
            self.context.build_resource_id("vpc-id", "parameter"),
            description="Contains the backend VPC ID",
            parameter_name=parameter_name,
            string_value=self.vpc.vpc_id,
        )

    def vpc_endpoint(self) -> None:
        """Interface endpoint for CloudWatch Logs so private functions can log."""
        add_aws_service_endpoint(
            self,
            self.vpc,
            constants.LOGS_ENDPOINT_TAG,
            constants.LOGS_ENDPOINT_TAG,
            ec2.InterfaceVpcEndpointAwsService.CLOUDWATCH_LOGS,
        )

    def create_vpc(self) -> ec2.Vpc:
        return ec2.Vpc(
            self,
            self.context.build_resource_id("vpc"),
            nat_gateways=0,
            max_azs=constants.MAX_AZS,
            vpc_name=self.context.build_resource_name("vpc"),
            ip_addresses=ec2.IpAddresses.cidr(constants.VPC_CIDR),
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name="Public-Subnet",
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=constants.CIDR_MASK,
                ),
                ec2.SubnetConfiguration(
                    name="Isolated-Subnet",
                    subnet_type=ec2.SubnetType.PRIVATE_ISOLATED,
                    cidr_mask=constants.CIDR_MASK,
                ),
            ],
        )
