from typing import Optional, cast

from attrs import define, field
from aws_cdk import aws_ec2 as ec2
from constructs import Construct

from common import constants
from common.log import logger


@define(slots=True, frozen=True)
class EndpointDefinition:
    endpoint_name: str
    service: Optional[ec2.InterfaceVpcEndpointAwsService] = field(default=None)


def check_if_endpoint_already_exists(vpc: ec2.IVpc, interface_tag: str) -> bool:
    """Whether the VPC already has a child construct with the given id."""
    return any(child.node.id == interface_tag for child in vpc.node.children)


def add_interface_endpoint(
    scope: Construct,
    vpc: ec2.IVpc,
    definition: EndpointDefinition,
    interface_tag: str,
) -> ec2.InterfaceVpcEndpoint:
    """Add an interface endpoint reachable over HTTPS from inside the VPC."""
    security_group = ec2.SecurityGroup(
        scope,
        f"{scope.node.id}-{definition.endpoint_name}",
        vpc=vpc,
        allow_all_outbound=True,
        description=f"Interface endpoint {definition.endpoint_name} access from the VPC",
    )
    security_group.add_ingress_rule(
        peer=ec2.Peer.ipv4(vpc.vpc_cidr_block),
        connection=ec2.Port.tcp(constants.HTTPS_PORT),
        description="Allow inbound HTTPS (TCP/443) from VPC CIDR",
    )
    return vpc.add_interface_endpoint(
        interface_tag,
        service=definition.service,
        security_groups=[security_group],
    )


def add_aws_service_endpoint(
    scope: Construct,
    vpc: ec2.IVpc,
    interface_tag: str,
    endpoint_name: str,
    service: Optional[ec2.InterfaceVpcEndpointAwsService] = None,
) -> ec2.InterfaceVpcEndpoint:
    """Ensure an interface endpoint for an AWS service exists in the VPC.

    The endpoint is looked up by ``interface_tag`` first, so calling this for
    several relations that share a VPC creates a single endpoint.
    """
    if check_if_endpoint_already_exists(vpc, interface_tag):
        logger.debug(
            "Reusing existing interface endpoint",
            extra={"interface_tag": interface_tag, "vpc": vpc.node.path},
        )
        return cast(ec2.InterfaceVpcEndpoint, vpc.node.find_child(interface_tag))

    definition = EndpointDefinition(endpoint_name=endpoint_name, service=service)
    return add_interface_endpoint(scope, vpc, definition, interface_tag)
