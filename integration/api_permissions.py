from typing import Iterable, Optional

from aws_cdk import aws_apigateway as apigw, aws_iam as iam, aws_lambda as _lambda

from common import constants


def give_api_permission_to_lambdas(
    functions: Optional[Iterable[_lambda.Function]],
    api: apigw.RestApiBase,
    permission_name: str,
) -> None:
    """Allow ``api`` to invoke each function.

    ``permission_name`` becomes the construct id of the permission inside each
    function, so a function that already holds it is left untouched.
    """
    if not functions:
        return
    for function in functions:
        if function.node.try_find_child(permission_name) is not None:
            continue
        function.add_permission(
            permission_name,
            principal=iam.ServicePrincipal(constants.API_GATEWAY_PRINCIPAL),
            source_arn=api.arn_for_execute_api("*"),
        )
