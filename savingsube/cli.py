"""Read-only inspection of a deployed wrapper and its pool.

Usage:
    savingsube reserves --contract 0x...
    savingsube position --contract 0x... 0xOWNER
    savingsube max-loss 1.05

``--contract`` defaults to the address cached by savingsube-deploy for the
selected network.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from decimal import Decimal

import structlog

from savingsube.chain import Web3ChainClient
from savingsube.config import Settings
from savingsube.constants import NETWORKS, TOKEN_DECIMALS, WRAPPER_CONTRACT_NAME
from savingsube.deploy.address_cache import AddressCache
from savingsube.errors import MissingAddressError, SavingsUbeError
from savingsube.kit import SavingsCELOWithUbeKit, new_savings_celo_with_ube_kit
from savingsube.logging_config import configure_logging
from savingsube.math.decimal_utils import DECIMAL_HIGH_PREC_CONTEXT, to_decimal
from savingsube.math.liquidity import max_loss_from_price_change
from savingsube.math.reserves import is_unbounded

logger = structlog.get_logger()


def format_amount(amount: int, decimals: int = TOKEN_DECIMALS) -> str:
    """Render a token amount in whole units, e.g. 1500000000000000000 -> "1.5"."""
    value = Decimal(amount).scaleb(-decimals, context=DECIMAL_HIGH_PREC_CONTEXT)
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _connect(settings: Settings, contract: str | None) -> SavingsCELOWithUbeKit:
    if contract is None:
        contract = AddressCache(settings.deploy_dir).get(settings.network, WRAPPER_CONTRACT_NAME)
        if contract is None:
            raise MissingAddressError(
                f"No {WRAPPER_CONTRACT_NAME} deployed on {settings.network}; pass --contract"
            )
    client = Web3ChainClient(
        settings.resolved_rpc_url,
        private_key=settings.private_key,
        receipt_timeout=settings.receipt_timeout,
    )
    return new_savings_celo_with_ube_kit(client, contract)


def cmd_reserves(args: argparse.Namespace, settings: Settings) -> None:
    kit = _connect(settings, args.contract)
    reserves = kit.reserves()
    ratio = kit.reserve_ratio()
    print(f"CELO reserve:  {format_amount(reserves.reserve_celo)}")
    print(f"sCELO reserve: {format_amount(reserves.reserve_scelo)}")
    if is_unbounded(ratio):
        print("Reserve ratio: unbounded (one-sided pool)")
        return
    print(f"Reserve ratio: {ratio:.8f}")
    print(f"Max loss:      {max_loss_from_price_change(ratio):.8f}")


def cmd_position(args: argparse.Namespace, settings: Settings) -> None:
    kit = _connect(settings, args.contract)
    position = kit.liquidity_balance_of(args.owner)
    print(f"ULP:   {format_amount(position.liquidity)} / {format_amount(position.total_supply)}")
    print(f"CELO:  {format_amount(position.balance_celo)}")
    print(f"sCELO: {format_amount(position.balance_scelo)}")


def cmd_max_loss(args: argparse.Namespace, settings: Settings) -> None:
    print(f"{max_loss_from_price_change(args.ratio):.9f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect the SavingsCELO/Ubeswap wrapper")
    parser.add_argument("-n", "--network", choices=sorted(NETWORKS), default=None)
    parser.add_argument("--rpc-url", default=None, help="Override the network's RPC URL")
    parser.add_argument("--log-level", default=None, help="Log level (default: info)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reserves = subparsers.add_parser("reserves", help="Pool reserves, ratio and loss bound")
    reserves.add_argument("--contract", default=None, help="Wrapper contract address")
    reserves.set_defaults(func=cmd_reserves)

    position = subparsers.add_parser("position", help="LP position of an address")
    position.add_argument("owner", help="LP token holder")
    position.add_argument("--contract", default=None, help="Wrapper contract address")
    position.set_defaults(func=cmd_position)

    max_loss = subparsers.add_parser("max-loss", help="Impermanent-loss bound for a ratio")
    max_loss.add_argument("ratio", type=to_decimal, help="Reserve ratio (>= 1)")
    max_loss.set_defaults(func=cmd_max_loss)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env().with_overrides(
        network=args.network,
        rpc_url=args.rpc_url,
        log_level=args.log_level,
    )
    try:
        configure_logging(settings.log_level)
        args.func(args, settings)
    except (SavingsUbeError, ValueError) as e:
        logger.error("command_failed", command=args.command, error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
