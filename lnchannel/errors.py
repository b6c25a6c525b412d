class ChannelTxError(Exception):
    """Base class for all errors raised while building channel artifacts"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return "{}: {}".format(type(self).__name__, self.message)


class InvalidPoint(ChannelTxError):
    """Malformed, off-curve or infinite public point"""


class InvalidScalar(ChannelTxError):
    """Secret scalar outside [1, n-1]"""


class InvalidDelay(ChannelTxError):
    """Relative or absolute timelock outside its encoding range"""


class InvalidScriptEncoding(ChannelTxError):
    """Script item or script too large, or of the wrong shape"""


class AmountOverflow(ChannelTxError):
    """Output value (or sum of output values) outside the amount domain"""
