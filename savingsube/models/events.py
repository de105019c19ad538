"""Pydantic models for data read from chain logs and the deployment cache."""

from pydantic import BaseModel, ConfigDict, Field

from savingsube.models.types import Address, Uint256


class DepositedEvent(BaseModel):
    """Decoded ``Deposited`` event emitted by the wrapper's ``deposit()``.

    ``direct`` is True when CELO was deposited straight into SavingsCELO and
    False when sCELO was bought from the Ubeswap pool instead.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender: Address = Field(alias="from")
    celo_amount: Uint256 = Field(alias="celoAmount")
    savings_amount: Uint256 = Field(alias="savingsAmount")
    direct: bool


class DeployedAddress(BaseModel):
    """Contents of a ``<network>.<contract>.addr.json`` cache file."""

    address: Address
