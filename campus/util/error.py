"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings are missing or unsafe for the environment."""

    pass


class DependencyInjectionError(UtilError):
    """A container could not be assembled as requested."""

    pass
