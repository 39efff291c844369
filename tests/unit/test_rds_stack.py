from typing import Any, Mapping

import pytest
from aws_cdk import App
from aws_cdk.assertions import Match, Template

from backend_infra.rds_stack import RdsStack
from networking.networking_stack import NetworkingStack
from stack_test_helpers import (
    UpdateDeletePolicyTestCase,
    build_config,
    find_resources_by_type,
    get_single_resource_id,
)


@pytest.fixture
def rds_template() -> Template:
    app = App()
    config = build_config()
    networking = NetworkingStack(app, "TestNetworkingStack", config=config)
    stack = RdsStack(app, "TestRdsStack", config=config, vpc=networking.vpc)
    return Template.from_stack(stack)


@pytest.fixture
def rds_json_template(rds_template: Template) -> Mapping[str, Any]:
    return rds_template.to_json()


RESOURCES = [
    ("AWS::RDS::DBInstance", 1),
    ("AWS::RDS::DBSubnetGroup", 1),
    ("AWS::SecretsManager::Secret", 1),
    ("AWS::SecretsManager::SecretTargetAttachment", 1),
]


@pytest.mark.parametrize("resource_type,expected", RESOURCES)
def test_resource_count(rds_template: Template, resource_type: str, expected: int):
    rds_template.resource_count_is(resource_type, expected)


def test_secret_generates_password(rds_template: Template):
    rds_template.has_resource_properties(
        "AWS::SecretsManager::Secret",
        {
            "Name": "acme-rds-secret-dev",
            "GenerateSecretString": {
                "SecretStringTemplate": '{"username": "admin"}',
                "GenerateStringKey": "password",
                "PasswordLength": 16,
                "ExcludePunctuation": True,
                "IncludeSpace": False,
            },
        },
    )


def test_instance_properties(rds_template: Template):
    rds_template.has_resource_properties(
        "AWS::RDS::DBInstance",
        {
            "DBInstanceIdentifier": "acme-rds-instance-dev",
            "Engine": "sqlserver-se",
            "LicenseModel": "license-included",
            "AllocatedStorage": "200",
            "DeletionProtection": False,
            "DBInstanceClass": "db.t3.xlarge",
        },
    )


def test_instance_uses_generated_secret(rds_template: Template):
    secret_id = get_single_resource_id(
        find_resources_by_type(rds_template, "AWS::SecretsManager::Secret"), "secret"
    )
    rds_template.has_resource_properties(
        "AWS::RDS::DBInstance",
        {
            "MasterUsername": {
                "Fn::Join": ["", Match.array_with([{"Ref": secret_id}])]
            },
        },
    )


UPDATE_DELETE_POLICY_CASE = [
    UpdateDeletePolicyTestCase(
        id="AWS::RDS::DBInstance", update_policy="Snapshot", delete_policy="Snapshot"
    ),
]


@pytest.mark.parametrize("case", UPDATE_DELETE_POLICY_CASE, ids=lambda test: test.id)
def test_resource_level_properties(
    rds_template: Template,
    rds_json_template: Mapping[str, Any],
    case: UpdateDeletePolicyTestCase,
):
    resources = find_resources_by_type(rds_template, case.id)
    logical_id = get_single_resource_id(resources, case.id)

    assert rds_json_template["Resources"][logical_id]["DeletionPolicy"] == case.delete_policy
    assert (
        rds_json_template["Resources"][logical_id]["UpdateReplacePolicy"]
        == case.update_policy
    )


def test_endpoint_output(rds_template: Template):
    rds_template.has_output("RDSInstanceEndpoint", {"Value": Match.any_value()})
