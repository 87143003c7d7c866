"""Exceptions raised by stackprint."""


class StackprintError(Exception):
    """Base class for stackprint errors."""

    pass


class ScanError(StackprintError):
    """A source root could not be walked."""

    pass


class ProfileCacheError(StackprintError):
    """The profile cache could not be written or read back."""

    pass
