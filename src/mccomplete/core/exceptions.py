"""Custom exceptions for mccomplete."""


class MCCompleteError(Exception):
    """Base exception for all mccomplete errors."""


class GrammarError(MCCompleteError):
    """The grammar source is malformed."""


class GrammarIntegrityError(GrammarError):
    """The grammar tree is inconsistent at query time (redirect cycle)."""


class RegistryError(MCCompleteError):
    """The registries source is malformed."""


class LoadError(MCCompleteError):
    """A data file could not be read or decoded."""


class ConfigError(MCCompleteError):
    """Configuration error."""
