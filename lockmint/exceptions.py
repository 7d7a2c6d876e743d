"""Custom exceptions for the lock-and-mint workflow."""


class LockMintError(Exception):
    """Base exception for lock-and-mint operations."""


class ConfigurationError(LockMintError):
    """Raised when configuration is missing or invalid."""


class NetworkIdentityMismatch(LockMintError):
    """Raised when the destination chain reports an unexpected network id."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid network id {actual}, must use network {expected}")


class DepositWaitError(LockMintError):
    """Raised when waiting for a deposit fails or the session ends before one arrives."""


class AttestationError(LockMintError):
    """Raised when the bridge network does not return a signature for a deposit."""


class DestinationSubmissionError(LockMintError):
    """Raised when the destination chain rejects or reverts the mint transaction."""


class WalletRpcError(LockMintError):
    """Raised when the funding wallet node returns an RPC error."""

    def __init__(self, method: str, code: int, message: str):
        self.method = method
        self.code = code
        super().__init__(f"{method} failed ({code}): {message}")
