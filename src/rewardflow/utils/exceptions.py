"""Custom exception classes for RewardFlow."""


class RewardFlowError(Exception):
    """Base exception for RewardFlow."""
    pass


class ConfigError(RewardFlowError):
    """Configuration-related errors."""
    pass


class SourceError(RewardFlowError):
    """Transaction feed could not be read or parsed."""
    pass


class ValidationError(RewardFlowError):
    """Invalid arguments passed by a caller."""
    pass
