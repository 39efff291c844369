import os
from typing import Any

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

logger = Logger(service="report-handler", level=os.getenv("LOG_LEVEL", "INFO").upper())
tracer = Tracer(service="report-handler")
app = APIGatewayRestResolver()

report_name = os.getenv("REPORT_NAME", "unknown")
environment = os.getenv("ENVIRONMENT", "unknown")


@app.get("/health")
@tracer.capture_method
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/")
@tracer.capture_method
def describe_report() -> dict[str, str]:
    logger.info("Report requested", extra={"report": report_name})
    return {"report": report_name, "environment": environment}


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    return app.resolve(event, context)
