#!/usr/bin/env python3
"""AWS CDK entrypoint for provisioning the report backend.

The deployment environment is mandatory and comes from the CDK context:

    cdk synth -c env=DEV

It selects ``sources/config/backend-<env>.properties``, which provides the
account, region, namespace and stack names used for the run.
"""
import sys

import aws_cdk as cdk

from backend_infra.application import build_application
from common.errors import BackendInfraError
from common.log import logger

app = cdk.App()

try:
    build_application(app)
except BackendInfraError as e:
    logger.error("Provisioning aborted", extra={"error": str(e)})
    sys.exit(str(e))

app.synth()
