"""Relations between a Lambda function and the resources it consumes.

Each helper injects the connection settings the function needs as environment
variables and grants it the permissions required to use the resource. They
must be called before the stack is synthesized and are safe to call twice
with the same arguments.
"""
from typing import Union

from aws_cdk import (
    aws_docdb as docdb,
    aws_dynamodb as dynamodb,
    aws_ec2 as ec2,
    aws_lambda as _lambda,
    aws_rds as rds,
    aws_s3 as s3,
    aws_secretsmanager as secretsmanager,
    aws_sqs as sqs,
    aws_stepfunctions as sfn,
)
from constructs import Construct

from common import constants
from networking.endpoints import add_aws_service_endpoint

RdsCluster = Union[rds.DatabaseCluster, rds.ServerlessCluster]


def lambda_to_docdb_relation(
    function: _lambda.Function, docdb_cluster: docdb.DatabaseCluster
) -> None:
    secret = docdb_cluster.secret
    function.add_environment("SM_SECRET_ARN", secret.secret_arn if secret else "")
    function.add_environment(
        "DOC_DB_ENDPOINT_PORT", docdb_cluster.cluster_endpoint.port_as_string()
    )
    function.add_environment(
        "DOC_DB_ENDPOINT_ADDRESS", docdb_cluster.cluster_endpoint.hostname
    )
    function.add_environment(
        "DOC_DB_ENDPOINT_SOCKET_ADDRESS", docdb_cluster.cluster_endpoint.socket_address
    )
    if secret:
        secret.grant_read(function)


def lambda_to_state_machine_relation(
    scope: Construct,
    function: _lambda.Function,
    state_machine: sfn.StateMachine,
    vpc: ec2.IVpc,
) -> None:
    """Let the function start executions and reach Step Functions privately."""
    state_machine.grant_start_execution(function)
    function.add_environment("STATE_MACHINE_ARN", state_machine.state_machine_arn)

    add_aws_service_endpoint(
        scope,
        vpc,
        constants.STEP_FUNCTIONS_ENDPOINT_TAG,
        constants.STEP_FUNCTIONS_ENDPOINT_TAG,
        ec2.InterfaceVpcEndpointAwsService.STEP_FUNCTIONS,
    )


def lambda_to_rds_relation(
    scope: Construct,
    function: _lambda.Function,
    cluster: RdsCluster,
    secret: secretsmanager.ISecret,
    vpc: ec2.IVpc,
) -> None:
    """Give the function Data API access to an Aurora cluster.

    The Data API is reached over its public endpoint, so no interface endpoint
    is added to ``vpc``.
    """
    function.add_environment("dbClusterArn", cluster.cluster_arn)
    function.add_environment("secretArn", secret.secret_arn)

    cluster.grant_data_api_access(function)
    secret.grant_read(function)


def lambda_to_dynamo_relation(
    function: _lambda.Function, table: dynamodb.ITable
) -> None:
    function.add_environment("TABLE_NAME", table.table_name)
    table.grant_full_access(function)


def lambda_to_s3_relation(function: _lambda.Function, bucket: s3.IBucket) -> None:
    function.add_environment("S3_BUCKET_NAME", bucket.bucket_name)
    bucket.grant_read_write(function)


def lambda_to_sqs_relation(function: _lambda.Function, queue: sqs.IQueue) -> None:
    function.add_environment("SQS_QUEUE_URL", queue.queue_url)
    queue.grant_send_messages(function)
    queue.grant_consume_messages(function)
    queue.grant_purge(function)
