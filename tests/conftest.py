"""
Pytest fixtures for the lock-and-mint suite.

Unit tests get an in-memory bridge client. The live fixtures skip unless the
environment (or .env) carries everything a testnet run needs.
"""

import logging

import pytest
import pytest_asyncio

from lockmint import ChainClient, ContractParam, LockAndMintParams, LockMintConfig, load_bridge_client
from lockmint.config import DEFAULT_ADAPTER_ADDRESS
from lockmint.exceptions import NetworkIdentityMismatch
from tests.helpers.fake_bridge import BridgeScript, FakeBridgeClient

logger = logging.getLogger("lockmint.test")

RECIPIENT_ADDRESS = "0x00000000000000000000000000000000000000aa"


@pytest.fixture
def mint_params() -> LockAndMintParams:
    return LockAndMintParams(
        send_to=DEFAULT_ADAPTER_ADDRESS,
        contract_fn="mint",
        contract_params=(ContractParam(name="_to", type="address", value=RECIPIENT_ADDRESS),),
    )


@pytest.fixture
def bridge_script() -> BridgeScript:
    return BridgeScript()


@pytest.fixture
def fake_bridge(bridge_script) -> FakeBridgeClient:
    return FakeBridgeClient(bridge_script)


@pytest_asyncio.fixture
async def mint_session(fake_bridge, mint_params):
    return await fake_bridge.create_mint_session(mint_params)


# ============================================================================
# Live testnet fixtures
# ============================================================================


@pytest.fixture(scope="session")
def live_config() -> LockMintConfig:
    config = LockMintConfig.from_env()
    if not config.is_live_ready():
        pytest.skip(f"Missing live testnet configuration: {', '.join(config.missing_live_settings())}")
    return config


@pytest.fixture(scope="session")
def chain_client(live_config) -> ChainClient:
    """Destination chain client, checked once before any live test runs."""
    chain = ChainClient.from_config(live_config)
    try:
        chain.ensure_network(live_config.destination_network_id)
    except NetworkIdentityMismatch as e:
        pytest.exit(str(e), returncode=1)
    return chain


@pytest_asyncio.fixture
async def live_bridge(live_config):
    async with load_bridge_client(live_config.bridge_client_factory, live_config) as bridge:
        logger.info(f"Bridge client ready on {bridge.network}")
        yield bridge
