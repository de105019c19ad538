"""Test helpers module for shared test utilities.

- constants: Contract addresses, accounts and common amounts
- fake_chain: In-memory ChainClient dispatching to Python handlers
- world: Simulated CELO/sCELO/Ubeswap/wrapper deployment
"""

from tests.helpers.fake_chain import FakeChainClient, Revert
from tests.helpers.world import FakeWorld

__all__ = ["FakeChainClient", "FakeWorld", "Revert"]
