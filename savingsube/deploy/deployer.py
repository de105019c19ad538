"""Deploy SavingsCELOWithUbeV1, reusing cached addresses.

Usage:
    savingsube-deploy --network alfajores --savings-address 0x...
    python -m savingsube.deploy.deployer --network mainnet

A contract is only deployed when no address file exists for the
(network, contract) pair; otherwise the cached address is reported.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog

from savingsube.chain import ChainClient, TransactionRequest, Web3ChainClient, send_all
from savingsube.config import Settings
from savingsube.constants import (
    NETWORKS,
    SAVINGS_CELO_ADDRESSES,
    UBESWAP_ROUTER,
    WRAPPER_CONTRACT_NAME,
)
from savingsube.contracts.encoding import encode_deployment
from savingsube.contracts.registry import CeloRegistry
from savingsube.deploy.address_cache import AddressCache
from savingsube.errors import DeploymentError, MissingAddressError, SavingsUbeError
from savingsube.logging_config import configure_logging
from savingsube.models.types import normalize_address

logger = structlog.get_logger()

DEFAULT_ARTIFACT = Path("build") / "contracts" / f"{WRAPPER_CONTRACT_NAME}.json"

# constructor(address savingsCELO, address CELO, address ubeRouter)
WRAPPER_CONSTRUCTOR_TYPES = ("address", "address", "address")


def load_bytecode(artifact_path: Path | str) -> str:
    """Read creation bytecode from a truffle build artifact.

    Raises:
        DeploymentError: If the artifact is unreadable or has no bytecode
    """
    try:
        with open(artifact_path) as f:
            artifact = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DeploymentError(f"Cannot read artifact {artifact_path}: {e}") from e
    bytecode = artifact.get("bytecode", "")
    if not bytecode or bytecode == "0x":
        raise DeploymentError(f"No bytecode in artifact {artifact_path}")
    return bytecode


def resolve_savings_address(network: str, override: str | None = None) -> str:
    """SavingsCELO address for network, preferring an explicit override.

    Raises:
        MissingAddressError: If no address is known and none was given
    """
    if override:
        return normalize_address(override, validate=True)
    try:
        return SAVINGS_CELO_ADDRESSES[network]
    except KeyError:
        raise MissingAddressError(
            f"No SavingsCELO address known for {network}; pass --savings-address"
        ) from None


def read_address_or_deploy(
    client: ChainClient,
    cache: AddressCache,
    network: str,
    contract_name: str,
    deployment_data: str,
    sender: str,
) -> str:
    """Return the cached address of contract_name, deploying it first if absent.

    Raises:
        DeploymentError: If the deployment receipt has no contract address
    """
    address = cache.get(network, contract_name)
    if address is None:
        logger.info("deploying", contract=contract_name, network=network)
        tx = TransactionRequest(
            to=None, data=deployment_data, description=f"deploy {contract_name}"
        )
        (receipt,) = send_all(client, [tx], sender)
        if not receipt.contract_address:
            raise DeploymentError(f"Contract address not found in receipt {receipt.tx_hash}")
        address = receipt.contract_address
        cache.store(network, contract_name, address)
    logger.info("deployed", contract=contract_name, network=network, address=address)
    return address


def deploy_wrapper(
    client: ChainClient,
    cache: AddressCache,
    network: str,
    sender: str,
    bytecode: str,
    savings_address: str,
    celo_address: str,
    router_address: str = UBESWAP_ROUTER,
) -> str:
    """Deploy (or look up) SavingsCELOWithUbeV1 wired to the given collaborators."""
    data = encode_deployment(
        bytecode,
        WRAPPER_CONSTRUCTOR_TYPES,
        [savings_address, celo_address, router_address],
    )
    return read_address_or_deploy(client, cache, network, WRAPPER_CONTRACT_NAME, data, sender)


def default_sender(client: ChainClient) -> str:
    """First account available to the client.

    Raises:
        SavingsUbeError: If the client has no accounts
    """
    accounts = client.accounts()
    if not accounts:
        raise SavingsUbeError("No account available; set SAVINGSUBE_PRIVATE_KEY")
    return accounts[0]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"Deploy {WRAPPER_CONTRACT_NAME}")
    parser.add_argument(
        "-n",
        "--network",
        choices=sorted(NETWORKS),
        default=None,
        help="Network to deploy to (default: SAVINGSUBE_NETWORK or devchain)",
    )
    parser.add_argument("--rpc-url", default=None, help="Override the network's RPC URL")
    parser.add_argument(
        "--artifact",
        type=Path,
        default=DEFAULT_ARTIFACT,
        help="Truffle artifact with the contract bytecode",
    )
    parser.add_argument(
        "--deploy-dir",
        type=Path,
        default=None,
        help="Directory of deployed-address files",
    )
    parser.add_argument(
        "--savings-address",
        default=None,
        help="SavingsCELO address (required where no default is known)",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: info)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env().with_overrides(
        network=args.network,
        rpc_url=args.rpc_url,
        deploy_dir=args.deploy_dir,
        log_level=args.log_level,
    )
    try:
        configure_logging(settings.log_level)
        savings_address = resolve_savings_address(settings.network, args.savings_address)
        bytecode = load_bytecode(args.artifact)
        client = Web3ChainClient(
            settings.resolved_rpc_url,
            private_key=settings.private_key,
            receipt_timeout=settings.receipt_timeout,
        )
        sender = default_sender(client)
        celo_address = CeloRegistry(client).gold_token()
        address = deploy_wrapper(
            client,
            AddressCache(settings.deploy_dir),
            settings.network,
            sender,
            bytecode,
            savings_address,
            celo_address,
        )
    except (SavingsUbeError, ValueError) as e:
        logger.error("deploy_failed", error=str(e))
        return 1

    print(address)
    return 0


if __name__ == "__main__":
    sys.exit(main())
