class BackendInfraError(Exception):
    """Base class for every synthesis-time failure raised by this project."""


class ConfigurationError(BackendInfraError):
    """A properties file could not be loaded or a required key is missing."""


class InvalidEnvironmentError(ConfigurationError):
    """The active environment is not one of DEV, INT, PRE or PRO."""


class UninitializedStateError(BackendInfraError):
    """The environment resolver was used before it was initialized."""
