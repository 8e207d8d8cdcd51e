"""Exception hierarchy for the simulator.

Deadline misses and overruns are simulated outcomes reported as events;
only invalid input and numeric limits are errors.
"""


class RTSimError(Exception):
    """Base class for all simulator errors."""


class InvalidTaskError(RTSimError, ValueError):
    """A task or task set violates its parameter constraints."""


class HorizonOverflowError(RTSimError, OverflowError):
    """The hyperperiod exceeds the configured simulation bound."""


class UnknownPolicyError(RTSimError, ValueError):
    """No scheduling policy is registered under the requested name."""


class ConfigError(RTSimError, ValueError):
    """A configuration file is unreadable or malformed."""
