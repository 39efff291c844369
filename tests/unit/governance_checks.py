from stack_test_helpers import find_resources_by_type
from governance_test_helpers import AWSService, resource_governance_doc_url


def assert_api_key_required(template):
    governance_doc = resource_governance_doc_url(AWSService.Api_Gateway.value)
    methods = find_resources_by_type(template, "AWS::ApiGateway::Method")
    unprotected = [
        logical_id
        for logical_id, method in methods.items()
        if method["Properties"].get("ApiKeyRequired") is not True
    ]
    assert not unprotected, (
        f"API Gateway methods {unprotected} must require an API key "
        f"according to backend security standards. see {governance_doc}"
    )


def assert_stages_behind_waf(template):
    governance_doc = resource_governance_doc_url(AWSService.WAF.value)
    stages = find_resources_by_type(template, "AWS::ApiGateway::Stage")
    associations = find_resources_by_type(template, "AWS::WAFv2::WebACLAssociation")
    assert len(associations) == len(stages), (
        "Every API Gateway stage must be associated with a WAF web ACL "
        f"according to backend security standards. see {governance_doc}"
    )
