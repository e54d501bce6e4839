"""
Exceptions raised by the prediction engine
"""


class SsqError(Exception):
    """Base class for all engine errors"""


class InputError(SsqError, ValueError):
    """Empty record set or a malformed draw record"""


class ConfigurationError(SsqError, ValueError):
    """Unknown algorithm tag or invalid engine setting"""
