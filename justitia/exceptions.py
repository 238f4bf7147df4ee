"""
Justitia Exceptions

Custom exception classes for node configuration and content hashing.
"""


class JustitiaException(Exception):
    """Base exception for Justitia."""
    pass


class ConfigurationError(JustitiaException):
    """Configuration error. The node cannot start with this configuration."""
    pass


class SettingsFileError(ConfigurationError):
    """Settings file is missing, unreadable or not valid structured data."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load settings file {path}: {reason}")


class MissingSettingError(ConfigurationError):
    """A required setting is absent."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Required setting '{path}' is missing")


class SettingTypeError(ConfigurationError):
    """A setting is present but of the wrong kind."""

    def __init__(self, path: str, expected: str, value):
        self.path = path
        self.expected = expected
        self.value = value
        super().__init__(
            f"Setting '{path}' must be {expected}, got {type(value).__name__}: {value!r}"
        )


class NodeIdNotAssignedError(ConfigurationError):
    """Node id is not assigned in the settings file (may be assigned later)."""
    pass


class HashError(JustitiaException):
    """Hashing error."""
    pass


class UnknownHashAlgorithmError(HashError):
    """No hash implementation is registered under the requested name."""
    pass


class DigestLengthError(HashError):
    """Hash output is shorter than the protocol hash length."""
    pass
