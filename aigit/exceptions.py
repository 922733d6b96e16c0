"""
Exception hierarchy shared by every aigit component.
"""


class AigitError(Exception):
    """Base class for errors reported to the user by the CLI."""
    pass


class ConfigMissingError(AigitError):
    """No configuration file, or a configuration without an API key."""
    pass


class ConfigInvalidError(AigitError):
    """Configuration contains a bad value or cannot be parsed."""
    pass


class GitUnavailableError(AigitError):
    """Not inside a git repository, or a git command failed."""
    pass


class NoChangesError(AigitError):
    """An operation that needs changes found an empty diff."""
    pass


class HookModifiedError(AigitError):
    """The installed pre-commit hook no longer matches the one aigit wrote."""
    pass


class ProviderError(AigitError):
    """The provider answered with a structured error."""
    pass


class EmptyResponseError(AigitError):
    """The provider answered without any usable text."""
    pass


class ProviderTimeoutError(AigitError):
    """The deadline expired while waiting for the provider."""
    pass


class ProviderRequestError(AigitError):
    """The HTTP request could not be completed."""
    pass


class ResponseParseError(AigitError):
    """The provider's response body is not a JSON object."""
    pass
