"""Network endpoints, well-known addresses and protocol parameters."""

from savingsube.models.types import is_valid_address


def _validate_address(name: str, address: str) -> str:
    """Validate and return a contract address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address.lower()


# RPC endpoints per network name (selected with --network)
NETWORKS: dict[str, str] = {
    "devchain": "http://127.0.0.1:7545",
    "alfajores": "https://alfajores-forno.celo-testnet.org",
    "baklava": "https://baklava-forno.celo-testnet.org",
    "mainnet": "https://forno.celo.org",
}

DEFAULT_NETWORK = "devchain"

# Celo core contracts registry, same address on every network
CELO_REGISTRY = _validate_address("Registry", "0x000000000000000000000000000000000000ce10")

# Ubeswap router (UniswapV2Router02 fork)
UBESWAP_ROUTER = _validate_address("Ubeswap router", "0xE3D8bd6Aed4F159bc8000a9cD47CffDb95F96121")

# SavingsCELO deployments. Networks missing here need an explicit address.
SAVINGS_CELO_ADDRESSES: dict[str, str] = {
    "mainnet": _validate_address("SavingsCELO", "0x2879BFD5e7c4EF331384E908aaA3Bd3014b703fA"),
}

WRAPPER_CONTRACT_NAME = "SavingsCELOWithUbeV1"

# maxReserveRatio is passed to the wrapper as a 1e18 fixed-point integer
RATIO_SCALE = 10**18

# Token amounts use 18 decimals (CELO, sCELO, ULP)
TOKEN_DECIMALS = 18

# "Infinite" ERC20 allowance: 0xff followed by 31 zero bytes
INFINITE_ALLOWANCE = 0xFF << 248

# Router deadlines are "now + 60" Unix seconds
DEADLINE_OFFSET_SECONDS = 60

__all__ = [
    "NETWORKS",
    "DEFAULT_NETWORK",
    "CELO_REGISTRY",
    "UBESWAP_ROUTER",
    "SAVINGS_CELO_ADDRESSES",
    "WRAPPER_CONTRACT_NAME",
    "RATIO_SCALE",
    "TOKEN_DECIMALS",
    "INFINITE_ALLOWANCE",
    "DEADLINE_OFFSET_SECONDS",
]
