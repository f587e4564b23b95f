"""Errors raised by the chain data model."""


class ChainDataError(Exception):
    """Base error for zcash chain data handling."""
    pass


class DecodeError(ChainDataError, ValueError):
    """RPC payload is not valid JSON or does not match the expected shape."""
    pass


class BlockWriteError(ChainDataError, OSError):
    """A record could not be serialized or written to disk."""
    pass
