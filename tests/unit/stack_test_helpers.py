from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

import pytest
from aws_cdk import App, Stack
from aws_cdk.assertions import Template

from backend_infra.lambda_stack import LambdaStack
from common import environment
from common.properties import ConfigurationSource

TEST_PROPERTIES = {
    "env.account": "123456789012",
    "env.region": "eu-west-1",
    "namespace": "acme",
    "architecture.type": "serverless",
    "stack.lambda": "lambda-stack",
    "stack.network": "network-stack",
    "stack.rds": "rds-stack",
}


# ------------------- Test Case Data Classes -------------------
@dataclass(frozen=True)
class LambdaTestCase:
    id: str
    function_name: str
    description: str
    report_name: str


@dataclass(frozen=True)
class UpdateDeletePolicyTestCase:
    id: str
    update_policy: str
    delete_policy: str


@dataclass(frozen=True)
class RelationTestCase:
    id: str
    expected_env: frozenset
    expected_actions: frozenset


# ------------------- Helper Functions -------------------


def find_resources_by_type(
    template: Template, resource_type: str, props: Optional[dict] = None
) -> Mapping[str, Any]:

    return template.find_resources(resource_type, props=props)


def get_single_resource_id(
    resources: Mapping[str, Any], resource_type: str = "resource"
) -> str:
    assert len(resources) == 1, f"expected a single {resource_type}, got {len(resources)}"
    return next(iter(resources))


def build_config(env: str = "DEV", **overrides: str) -> ConfigurationSource:
    return ConfigurationSource(
        path="test.properties",
        environment=env,
        properties={**TEST_PROPERTIES, **overrides},
    )


def build_template(stack_id: str = "TestLambdaStack"):
    app = App()
    stack = LambdaStack(app, stack_id, config=build_config())
    return Template.from_stack(stack)


def write_properties(root: Path, env: str, content: str) -> Path:
    """Write ``sources/config/backend-<env>.properties`` under ``root``."""
    config_dir = root / "sources" / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / f"backend-{env.lower()}.properties"
    path.write_text(content)
    return path


def function_environment(
    template: Template, function_logical_prefix: str
) -> Mapping[str, Any]:
    functions = find_resources_by_type(template, "AWS::Lambda::Function")
    matches = {
        logical_id: resource
        for logical_id, resource in functions.items()
        if logical_id.startswith(function_logical_prefix)
    }
    logical_id = get_single_resource_id(matches, "function")
    return matches[logical_id]["Properties"].get("Environment", {}).get("Variables", {})


def policy_actions(template: Template, role_logical_prefix: str) -> set[str]:
    """All IAM actions granted through inline policies attached to a role."""
    actions: set[str] = set()
    for policy in find_resources_by_type(template, "AWS::IAM::Policy").values():
        roles = [role.get("Ref", "") for role in policy["Properties"]["Roles"]]
        if not any(role.startswith(role_logical_prefix) for role in roles):
            continue
        for statement in policy["Properties"]["PolicyDocument"]["Statement"]:
            action = statement["Action"]
            actions.update([action] if isinstance(action, str) else action)
    return actions


# ------------------- Pytest Fixtures -------------------


@pytest.fixture
def reset_environment() -> Iterator[None]:
    environment.reset()
    yield
    environment.reset()


@pytest.fixture
def stack() -> Stack:
    return Stack(App(), "TestRelationsStack")


@pytest.fixture
def template() -> Template:
    return build_template()


@pytest.fixture
def json_template(template: Template) -> Mapping[str, Any]:
    return template.to_json()
