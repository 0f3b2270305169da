"""Exceptions raised while building and rendering release notes."""


class RelnotesError(Exception):
    """Base class for errors reported by the release notes pipeline."""


class ConfigError(RelnotesError):
    """The caller supplied an incomplete rendering configuration."""


class NotesFileError(RelnotesError):
    """A notes file does not have a recognised structure."""
