import common.constants as constants
from common import environment
from common.properties import load_active_configuration


def format_resource_name(namespace: str, logical_name: str, env: str) -> str:
    return f"{namespace}-{logical_name}-{env.lower()}"


def compute_resource_name(
    logical_name: str, path_level: str = constants.PROJECT_ROOT_PREFIX
) -> str:
    """Build the environment-qualified name of a resource.

    Examples:
        - namespace=acme, env=DEV: compute_resource_name("lambda") -> acme-lambda-dev

    Raises:
        UninitializedStateError: the environment resolver was not initialized.
        ConfigurationError: ``namespace`` is missing from the properties file.
    """
    handle = environment.get_instance()
    config = load_active_configuration(path_level)
    return format_resource_name(
        config.get(constants.NAMESPACE_KEY), logical_name, handle.get_environment()
    )
