import os

from aws_lambda_powertools import Logger

logger = Logger(service="backend-infra", level=os.getenv("LOG_LEVEL", "INFO").upper())
