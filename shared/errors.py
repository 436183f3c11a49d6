"""Error taxonomy shared by the notifier core and its adapters."""


class NotifyError(Exception):
    """Base class for all notifier errors."""


class ConfigurationError(NotifyError):
    """A pipeline could not be assembled from its declarative settings."""


class InvalidAddress(ConfigurationError, ValueError):
    """An email address could not be parsed."""


class UnknownMode(ConfigurationError, ValueError):
    """A mailing list declared a delivery mode we do not know."""


class ConflictingAuthorSettings(ConfigurationError):
    """Author override and allowed author domains are both set, or both missing."""


class MissingPath(NotifyError):
    """A patch lacks the path its status requires (upstream diff bug)."""
