"""Exceptions raised by importorder."""


class ImportOrderError(Exception):
    """Base exception for importorder errors."""

    pass


class ConfigError(ImportOrderError):
    """Raised when the configuration file cannot be used."""

    pass


class DiscoveryError(ImportOrderError):
    """Raised when the input path cannot be resolved into files."""

    pass


class BackupError(ImportOrderError):
    """Raised when a backup copy cannot be written."""

    pass


class ProcessingError(ImportOrderError):
    """Raised when a file cannot be read or rewritten."""

    pass
