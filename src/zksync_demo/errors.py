"""Error types raised by the zkSync demo.

Each stage of a run has its own error class so callers embedding the
demo can tell a bad config file apart from a failed SDK call. The CLI
treats all of them as fatal.
"""


class DemoError(Exception):
    """Base class for every error the demo raises on purpose."""


class ConfigError(DemoError, ValueError):
    """The configuration file is missing, unreadable or malformed."""


class InstanceError(DemoError):
    """Building the signer, providers or wallet failed."""


class OperationError(DemoError):
    """An SDK call failed while running deposit, transfer or withdrawal."""
