"""Process-wide resolution of the deployment environment.

The environment is read once from the CDK context (``cdk synth -c env=DEV``)
and shared by every naming and configuration lookup for the rest of the
synthesis run. The value itself is only validated when a properties path is
resolved from it.
"""
from enum import Enum
from typing import Optional, Union

from attrs import define, field
from aws_cdk import App

import common.constants as constants
from common.errors import InvalidEnvironmentError, UninitializedStateError
from common.log import logger


class Environment(str, Enum):
    DEV = "DEV"
    INT = "INT"
    PRE = "PRE"
    PRO = "PRO"


@define(slots=True)
class EnvironmentHandle:
    _env: Optional[str] = field(default=None)

    def get_environment(self) -> Optional[str]:
        return self._env

    def set_environment(self, env: Union[Environment, str]) -> None:
        """Override the active environment. Only meant for test isolation."""
        self._env = env.value if isinstance(env, Environment) else env

    def resolve_config_path(self, path_level: str) -> str:
        """Return the properties file path for the active environment.

        Args:
            path_level: prefix pointing at the folder that holds ``sources/``,
                for example ``"../"`` or an absolute directory ending in ``/``.

        Raises:
            InvalidEnvironmentError: the environment is missing or not one of
                DEV, INT, PRE or PRO.
        """
        try:
            env = Environment(self._env)
        except ValueError:
            raise InvalidEnvironmentError(constants.INVALID_ENV_MESSAGE) from None
        file_name = constants.CONFIG_FILE_TEMPLATE.format(env=env.value.lower())
        return f"{path_level}{constants.CONFIG_DIR}/{file_name}"


_instance: Optional[EnvironmentHandle] = None


def initialize(context_value: Optional[str]) -> EnvironmentHandle:
    """Create the environment handle, or return the one already created.

    A second call never re-initializes: its value is ignored.
    """
    global _instance
    if _instance is None:
        _instance = EnvironmentHandle(env=context_value)
        logger.info("Environment initialized", extra={"environment": context_value})
    elif _instance.get_environment() != context_value:
        logger.warning(
            "Environment already initialized, ignoring new value",
            extra={
                "environment": _instance.get_environment(),
                "ignored_value": context_value,
            },
        )
    return _instance


def initialize_from_app(app: App) -> EnvironmentHandle:
    return initialize(app.node.try_get_context(constants.CONTEXT_ENV_KEY))


def get_instance() -> EnvironmentHandle:
    if _instance is None:
        raise UninitializedStateError(
            "Environment has not been initialized, call initialize() first"
        )
    return _instance


def reset() -> None:
    global _instance
    _instance = None
