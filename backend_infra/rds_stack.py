import json

from aws_cdk import (
    CfnOutput,
    RemovalPolicy,
    Stack,
    aws_ec2 as ec2,
    aws_rds as rds,
    aws_secretsmanager as secretsmanager,
)
from constructs import Construct

import common.constants as constants
from common.properties import ConfigurationSource
from common.stack_context import StackContext


class RdsStack(Stack):

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        config: ConfigurationSource,
        vpc: ec2.IVpc,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)
        self.context = StackContext(scope=self, config=config)

        self.secret = self._build_secret()
        self.instance = self._build_instance(vpc, self.secret)

        CfnOutput(
            self,
            "RDSInstanceEndpoint",
            value=self.instance.db_instance_endpoint_address,
        )

    def _build_secret(self) -> secretsmanager.Secret:
        """Master credentials with a generated password."""
        return secretsmanager.Secret(
            self,
            self.context.build_resource_id("rds-secret"),
            secret_name=self.context.build_resource_name("rds-secret"),
            generate_secret_string=secretsmanager.SecretStringGenerator(
                secret_string_template=json.dumps({"username": constants.RDS_USERNAME}),
                generate_string_key="password",
                exclude_punctuation=True,
                include_space=False,
                password_length=constants.RDS_PASSWORD_LENGTH,
            ),
        )

    def _build_instance(
        self, vpc: ec2.IVpc, secret: secretsmanager.ISecret
    ) -> rds.DatabaseInstance:
        return rds.DatabaseInstance(
            self,
            self.context.build_resource_id("rds-instance"),
            instance_identifier=self.context.build_resource_name("rds-instance"),
            engine=rds.DatabaseInstanceEngine.sql_server_se(
                version=rds.SqlServerEngineVersion.VER_16
            ),
            license_model=rds.LicenseModel.LICENSE_INCLUDED,
            instance_type=ec2.InstanceType.of(
                constants.RDS_INSTANCE_CLASS, constants.RDS_INSTANCE_SIZE
            ),
            credentials=rds.Credentials.from_secret(secret),
            vpc=vpc,
            vpc_subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_ISOLATED),
            allocated_storage=constants.RDS_ALLOCATED_STORAGE,
            deletion_protection=False,
            removal_policy=RemovalPolicy.SNAPSHOT,
        )
