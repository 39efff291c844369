from pathlib import Path

from attrs import define
from aws_cdk import aws_ec2 as ec2, aws_lambda as _lambda, aws_logs as logs

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT_PREFIX = f"{PROJECT_ROOT}/"
LAMBDA_SRC = str(PROJECT_ROOT / "lambdas")

POWER_TOOLS_PYTHON_RUNTIME = "python312"
POWER_TOOLS_LAMBDA_LAYER_NAME = "AWSLambdaPowertoolsPythonV3"
POWER_TOOLS_LAMBDA_LAYER_ACCOUNT = "017000801446"
POWER_TOOLS_VERSION = "18"
POWER_TOOLS_ARCHITECTURE = "x86_64"
POWER_TOOLS_LAYER = "arn:aws:lambda:{region}:{lambda_layer_account}:layer:{power_tools_type}-{runtime}-{architecture}:{version}"

PYTHON_RUNTIME = _lambda.Runtime.PYTHON_3_12
DEFAULT_ARCHITECTURE = _lambda.Architecture.X86_64

# Environment resolution
CONTEXT_ENV_KEY = "env"
CONFIG_DIR = "sources/config"
CONFIG_FILE_TEMPLATE = "backend-{env}.properties"
INVALID_ENV_MESSAGE = (
    "Please provide a valid environment variable. "
    "Format: cdk <COMMAND> -c env=<DEV,INT,PRE or PRO>"
)

# Properties keys
NAMESPACE_KEY = "namespace"
ACCOUNT_KEY = "env.account"
REGION_KEY = "env.region"
SUPPRESSIONS_PATH_KEY = "aspects.suppressions.path"
TAGGING_PATH_KEY = "aspects.tagging.path"
ARCHITECTURE_TYPE_KEY = "architecture.type"
LAMBDA_STACK_KEY = "stack.lambda"
NETWORK_STACK_KEY = "stack.network"
RDS_STACK_KEY = "stack.rds"

# API Gateway / WAF
API_STAGE_NAME = "prod"
ACCESS_LOG_RETENTION = logs.RetentionDays.THREE_MONTHS
API_FUNCTION_MEMORY_SIZE = 512
API_FUNCTION_HANDLER = "report_handler.handler"
API_GATEWAY_PRINCIPAL = "apigateway.amazonaws.com"
WAF_SCOPE = "REGIONAL"


@define(slots=True, frozen=True)
class ApiFunctionDefinition:
    name: str
    description: str


API_FUNCTIONS = (
    ApiFunctionDefinition("export-tech-process", "Exports the tech process report"),
    ApiFunctionDefinition("val-fat-aux-carga-as-is", "Loads the as-is billing auxiliary data"),
    ApiFunctionDefinition("val-fat-status-sap", "Validates billing status against SAP"),
    ApiFunctionDefinition("val-faturamento-checagem-auto", "Runs the automatic billing check"),
    ApiFunctionDefinition("val-faturamento-geral-kit-csn", "Validates general CSN kit billing"),
    ApiFunctionDefinition("val-faturamento-tratativa-csn", "Handles CSN billing treatment"),
)

# Networking
VPC_CIDR = "10.0.0.0/16"
CIDR_MASK = 24
MAX_AZS = 2
HTTPS_PORT = 443
STEP_FUNCTIONS_ENDPOINT_TAG = "SF"
LOGS_ENDPOINT_TAG = "LOGS"

# RDS
RDS_USERNAME = "admin"
RDS_PASSWORD_LENGTH = 16
RDS_ALLOCATED_STORAGE = 200
RDS_INSTANCE_CLASS = ec2.InstanceClass.BURSTABLE3
RDS_INSTANCE_SIZE = ec2.InstanceSize.XLARGE
