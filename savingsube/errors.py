"""Error classes for savingsube.

Pool math errors are also ArithmeticErrors so callers treating them as
plain arithmetic failures keep working.
"""


class SavingsUbeError(Exception):
    """Base error for savingsube operations."""

    pass


class PoolMathError(SavingsUbeError, ArithmeticError):
    """A derived pool quantity is undefined for the given reserves."""

    pass


class NoLiquidityError(PoolMathError):
    """LP token total supply is zero, so positions cannot be valued."""

    pass


class NoEstablishedPriceError(PoolMathError):
    """sCELO reserve is zero, so the pool has no price to match."""

    pass


class UnboundedRatioError(PoolMathError):
    """Reserve ratio is unbounded (one-sided pool) where a finite ratio is required."""

    pass


class Uint256OverflowError(SavingsUbeError, ArithmeticError):
    """Value is negative or exceeds 2^256-1."""

    pass


class UnsupportedNetworkError(SavingsUbeError):
    """Network name is not one of the known networks."""

    pass


class MissingAddressError(SavingsUbeError):
    """A required contract address is not known for this network."""

    pass


class AddressCacheError(SavingsUbeError):
    """A deployed-address file exists but cannot be read."""

    pass


class DeploymentError(SavingsUbeError):
    """Contract deployment did not produce a contract address."""

    pass


class TransactionFailedError(SavingsUbeError):
    """Transaction was mined but reverted (receipt status 0)."""

    pass


class EventNotFoundError(SavingsUbeError):
    """Expected event log is missing from a transaction receipt."""

    pass
