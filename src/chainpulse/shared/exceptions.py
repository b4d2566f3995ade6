"""
Chainpulse Exception Hierarchy

Domain-level failures of the refresh pipeline. Fetch and query failures
propagate to the caller; LogDecodeAnomaly is recorded and absorbed by the
volume aggregation and never escapes it.
"""


class ChainPulseError(Exception):
    """Base exception for all chainpulse errors."""

    def __init__(self, message: str, block_number: int | None = None):
        super().__init__(message)
        self.block_number = block_number


class ProviderUnavailable(ChainPulseError):
    """Head height or a block of the window could not be fetched."""

    pass


class MalformedBlockData(ChainPulseError):
    """A numeric block field could not be parsed or is unusable."""

    def __init__(
        self,
        message: str,
        block_number: int | None = None,
        field: str | None = None,
    ):
        super().__init__(message, block_number=block_number)
        self.field = field


class LogDecodeAnomaly(ChainPulseError):
    """One transfer log payload failed ABI decoding."""

    def __init__(
        self,
        message: str,
        block_number: int | None = None,
        log_index: int | None = None,
        data: str | None = None,
    ):
        super().__init__(message, block_number=block_number)
        self.log_index = log_index
        self.data = data


class VolumeFetchFailed(ChainPulseError):
    """The transfer log query for a block failed."""

    def __init__(
        self,
        message: str,
        block_number: int | None = None,
        token_address: str | None = None,
    ):
        super().__init__(message, block_number=block_number)
        self.token_address = token_address
