from pathlib import Path
from typing import Mapping, Optional

from attrs import define, field
from jproperties import Properties, PropertyError

import common.constants as constants
from common import environment
from common.errors import ConfigurationError
from common.log import logger


@define(slots=True, frozen=True)
class ConfigurationSource:
    path: str
    environment: Optional[str] = field(default=None)
    properties: Mapping[str, str] = field(factory=dict)

    def get(self, key: str) -> str:
        try:
            return self.properties[key]
        except KeyError:
            raise ConfigurationError(
                f"Missing required key '{key}' in {self.path}"
            ) from None

    def get_optional(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.properties.get(key, default)

    def resolve_path(self, key: str) -> str:
        """Resolve a path-valued key against the project root."""
        return str(constants.PROJECT_ROOT / self.get(key).lstrip("/"))


def load_properties(path: str, environment: Optional[str] = None) -> ConfigurationSource:
    properties = Properties()
    try:
        with open(path, "rb") as file:
            properties.load(file, "utf-8")
    except (OSError, PropertyError) as e:
        raise ConfigurationError(f"Unable to load properties file {path}: {e}") from e
    logger.debug("Loaded properties file", extra={"path": path})
    return ConfigurationSource(
        path=path,
        environment=environment,
        properties={key: value.data for key, value in properties.items()},
    )


def load_active_configuration(
    path_level: str = constants.PROJECT_ROOT_PREFIX,
) -> ConfigurationSource:
    handle = environment.get_instance()
    path = handle.resolve_config_path(path_level)
    return load_properties(str(Path(path)), environment=handle.get_environment())
