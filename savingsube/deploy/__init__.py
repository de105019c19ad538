"""Deployment of the wrapper contract."""

from savingsube.deploy.address_cache import AddressCache
from savingsube.deploy.deployer import deploy_wrapper, read_address_or_deploy

__all__ = ["AddressCache", "deploy_wrapper", "read_address_or_deploy"]
