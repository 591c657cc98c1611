"""Domain-specific errors for btlockctl."""


class BtlockctlError(Exception):
    """Base error for btlockctl."""


class ConfigValidationError(BtlockctlError):
    """Raised when the settings file does not conform to schema or semantics."""


class ConfigLoadError(BtlockctlError):
    """Raised when reading the settings file fails."""


class RegistryError(BtlockctlError):
    """Raised when the paired-device registry cannot be queried."""


class BackendUnavailableError(BtlockctlError):
    """Raised when the platform Bluetooth/notification frameworks are missing."""
