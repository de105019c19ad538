"""On-disk cache of deployed contract addresses.

One JSON file per (network, contract name):
``<directory>/<network>.<contract>.addr.json`` containing
``{"address": "0x..."}``.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from savingsube.errors import AddressCacheError
from savingsube.models.events import DeployedAddress

logger = structlog.get_logger()


class AddressCache:
    """Lookup and create-if-absent storage for deployed addresses."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def path_for(self, network: str, contract_name: str) -> Path:
        return self.directory / f"{network}.{contract_name}.addr.json"

    def get(self, network: str, contract_name: str) -> str | None:
        """Cached address, or None if the contract was never deployed here.

        Raises:
            AddressCacheError: If the file is not JSON or holds no valid address
        """
        path = self.path_for(network, contract_name)
        if not path.exists():
            return None
        try:
            with open(path) as f:
                data = json.load(f)
            return DeployedAddress.model_validate(data).address
        except (json.JSONDecodeError, ValidationError) as e:
            raise AddressCacheError(f"Unreadable address file {path}: {e}") from e

    def store(self, network: str, contract_name: str, address: str) -> Path:
        """Write address for (network, contract_name), replacing any old entry."""
        record = DeployedAddress(address=address)
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(network, contract_name)
        with open(path, "w") as f:
            json.dump(record.model_dump(), f)
        logger.debug("address_stored", network=network, contract=contract_name, path=str(path))
        return path


__all__ = ["AddressCache"]
