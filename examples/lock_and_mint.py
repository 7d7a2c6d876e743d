"""
Lock and Mint - Send BTC to a gateway address and mint the wrapped token.

This script runs one full lock-and-mint against a live testnet: it opens a
session that calls the adapter contract's `mint` for a fresh account, funds
the gateway address from the bitcoind wallet and drives the deposit through
the bridge network to the destination chain.

Requirements:
- WEB3_INFURA_PROJECT_ID (or DESTINATION_RPC_URL): destination chain endpoint
- TESTNET_PRIVATE_KEY: WIF key of the funding wallet
- BRIDGE_CLIENT_FACTORY: "module:factory" building the bridge client
- BITCOIND_RPC_URL / BITCOIND_RPC_USER / BITCOIND_RPC_PASSWORD: funding node

Usage:
    python -m examples.lock_and_mint
"""

import asyncio
import logging

from lockmint import (
    BitcoindWallet,
    ChainClient,
    ConfigurationError,
    ContractParam,
    LockAndMintParams,
    get_config,
    load_bridge_client,
    run_workflow,
)
from lockmint.utils import setup_logging, to_smallest

logger = logging.getLogger("lockmint.example")


async def main():
    """Execute a lock-and-mint of BTC into the adapter contract."""

    # Load configuration from environment variables and .env
    config = get_config()
    setup_logging(config.log_level)
    if not config.is_live_ready():
        raise ConfigurationError(f"Missing settings: {', '.join(config.missing_live_settings())}")

    # Refuse to run against anything but the expected network
    chain = ChainClient.from_config(config)
    chain.ensure_network(config.destination_network_id)
    test_account = chain.create_account()

    async with load_bridge_client(config.bridge_client_factory, config) as bridge:
        session = await bridge.create_mint_session(
            LockAndMintParams(
                send_to=config.adapter_address,
                contract_fn="mint",
                contract_params=(ContractParam(name="_to", type="address", value=test_account.address),),
            )
        )
        logger.info(f"Gateway address: {session.gateway_address}")

        async with BitcoindWallet.from_config(config) as wallet:
            await wallet.import_private_key(config.funding_private_key)
            logger.info(f"BTC balance: {await wallet.balance_of('btc')} btc ({await wallet.address('btc')})")
            amount = to_smallest(config.mint_amount_btc, "BTC")
            logger.info(f"Sending BTC: {amount}")
            await wallet.send_sats(session.gateway_address, amount, "btc")

        receipt = await asyncio.wait_for(
            run_workflow(
                bridge,
                chain.provider,
                session,
                required_confirmations=config.required_confirmations,
                gas_limit=config.gas_limit,
                settle_seconds=config.settle_seconds,
            ),
            timeout=config.workflow_timeout,
        )
        logger.info(f"Minted for {test_account.address}: {receipt.tx_hash}")


if __name__ == "__main__":
    asyncio.run(main())
