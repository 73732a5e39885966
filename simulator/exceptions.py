"""
Simulator exceptions

InvalidConfigurationError is raised before any simulation state exists.
PreconditionViolation signals a broken internal contract (for example a
dispatch to a lift that is not idle) and is never handled inside the core.
"""


class InvalidConfigurationError(ValueError):
    """Floor/lift counts or timings outside their allowed bounds"""


class PreconditionViolation(RuntimeError):
    """A core operation was called in a state it does not accept"""
