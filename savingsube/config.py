"""Runtime settings read from environment variables.

Environment variables:
- SAVINGSUBE_NETWORK: Network name (default: devchain)
- SAVINGSUBE_RPC_URL: RPC endpoint, overrides the network's default
- SAVINGSUBE_PRIVATE_KEY: Key for local signing; without it the node's
  own accounts are used (devchain)
- SAVINGSUBE_DEPLOY_DIR: Directory of deployed-address files (default: deployments)
- SAVINGSUBE_LOG_LEVEL: Log level (default: info)
- SAVINGSUBE_RECEIPT_TIMEOUT: Seconds to wait for each receipt (default: 120)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from savingsube.constants import DEFAULT_NETWORK, NETWORKS
from savingsube.errors import UnsupportedNetworkError


def network_url(network: str) -> str:
    """RPC URL of a named network.

    Raises:
        UnsupportedNetworkError: If the network is unknown
    """
    try:
        return NETWORKS[network]
    except KeyError:
        raise UnsupportedNetworkError(
            f"Unsupported network: {network} (options: {', '.join(NETWORKS)})"
        ) from None


@dataclass(frozen=True)
class Settings:
    """Connection and deployment settings.

    Attributes:
        network: Network name, one of NETWORKS
        rpc_url: Explicit RPC URL, or None to use the network's default
        private_key: Hex key for local signing, or None
        deploy_dir: Directory holding ``<network>.<contract>.addr.json`` files
        log_level: structlog level name
        receipt_timeout: Seconds to wait for a transaction receipt
    """

    network: str = DEFAULT_NETWORK
    rpc_url: str | None = None
    private_key: str | None = None
    deploy_dir: Path = Path("deployments")
    log_level: str = "info"
    receipt_timeout: float = 120.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            network=env.get("SAVINGSUBE_NETWORK", DEFAULT_NETWORK),
            rpc_url=env.get("SAVINGSUBE_RPC_URL") or None,
            private_key=env.get("SAVINGSUBE_PRIVATE_KEY") or None,
            deploy_dir=Path(env.get("SAVINGSUBE_DEPLOY_DIR", "deployments")),
            log_level=env.get("SAVINGSUBE_LOG_LEVEL", "info").lower(),
            receipt_timeout=float(env.get("SAVINGSUBE_RECEIPT_TIMEOUT", "120")),
        )

    def with_overrides(self, **overrides: object) -> Settings:
        """Copy with the given fields replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @property
    def resolved_rpc_url(self) -> str:
        """Explicit rpc_url, or the network's default endpoint.

        Raises:
            UnsupportedNetworkError: If no rpc_url is set and the network is unknown
        """
        return self.rpc_url or network_url(self.network)


__all__ = ["Settings", "network_url"]
