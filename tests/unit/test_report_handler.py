import json
from dataclasses import dataclass

import pytest

from lambdas import report_handler


@dataclass
class LambdaContext:
    function_name: str = "acme-export-tech-process-dev"
    memory_limit_in_mb: int = 512
    invoked_function_arn: str = (
        "arn:aws:lambda:eu-west-1:123456789012:function:acme-export-tech-process-dev"
    )
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


def api_gateway_event(path: str) -> dict:
    return {
        "resource": "/{proxy+}",
        "path": path,
        "httpMethod": "GET",
        "headers": {"Accept": "application/json"},
        "multiValueHeaders": {"Accept": ["application/json"]},
        "queryStringParameters": None,
        "multiValueQueryStringParameters": None,
        "pathParameters": {"proxy": path.lstrip("/")},
        "stageVariables": None,
        "requestContext": {
            "requestId": "c6af9ac6-7b61-11e6-9a41-93e8deadbeef",
            "stage": "prod",
            "httpMethod": "GET",
            "path": f"/prod{path}",
        },
        "body": None,
        "isBase64Encoded": False,
    }


@pytest.fixture
def lambda_context() -> LambdaContext:
    return LambdaContext()


def test_health(lambda_context: LambdaContext):
    response = report_handler.handler(api_gateway_event("/health"), lambda_context)

    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == {"status": "ok"}


def test_describe_report(monkeypatch, lambda_context: LambdaContext):
    monkeypatch.setattr(report_handler, "report_name", "export-tech-process")
    monkeypatch.setattr(report_handler, "environment", "DEV")

    response = report_handler.handler(api_gateway_event("/"), lambda_context)

    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == {
        "report": "export-tech-process",
        "environment": "DEV",
    }


def test_unknown_route(lambda_context: LambdaContext):
    response = report_handler.handler(api_gateway_event("/missing"), lambda_context)

    assert response["statusCode"] == 404
