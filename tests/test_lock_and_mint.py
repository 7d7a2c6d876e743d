"""
Live lock-and-mint against the testnet.

Sends BTC from the funding wallet to a fresh gateway address and waits until
the adapter contract has minted the wrapped token for a throwaway account.
Needs a funded wallet, a destination RPC endpoint and a bridge client factory;
see LockMintConfig for the variables.

Run with:
    pytest -m integration tests/test_lock_and_mint.py
"""

import asyncio
import logging

import pytest

from lockmint import BitcoindWallet, ContractParam, DepositSubmissionWorkflow, LockAndMintParams
from lockmint.utils import to_smallest

logger = logging.getLogger("lockmint.integration_tests")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_should_mint_wrapped_btc(live_config, chain_client, live_bridge):
    """
    Mint wrapped BTC through the adapter contract.

    Flow:
    1. Create a test account on the destination chain
    2. Open a mint session calling `mint(_to)` on the adapter
    3. Fund the gateway address from the BTC wallet
    4. Wait for the deposit, submit it for attestation, submit the signature
    """
    logger.info("=" * 80)
    logger.info("LOCK AND MINT TEST")
    logger.info("=" * 80)

    test_account = chain_client.create_account()

    session = await live_bridge.create_mint_session(
        LockAndMintParams(
            send_to=live_config.adapter_address,
            contract_fn="mint",
            contract_params=(ContractParam(name="_to", type="address", value=test_account.address),),
        )
    )
    logger.info(f"Gateway address: {session.gateway_address}")

    async with BitcoindWallet.from_config(live_config) as wallet:
        await wallet.import_private_key(live_config.funding_private_key)
        logger.info(f"BTC balance: {await wallet.balance_of('btc')} btc ({await wallet.address('btc')})")
        amount = to_smallest(live_config.mint_amount_btc, "BTC")
        logger.info(f"Sending BTC: {amount}")
        await wallet.send_sats(session.gateway_address, amount, "btc")

    workflow = DepositSubmissionWorkflow(
        live_bridge,
        chain_client.provider,
        settle_seconds=live_config.settle_seconds,
    )
    receipt = await asyncio.wait_for(
        workflow.run(session, live_config.required_confirmations, live_config.gas_limit),
        timeout=live_config.workflow_timeout,
    )

    assert receipt.tx_hash.startswith("0x")
    logger.info(f"✅ Minted for {test_account.address}: {receipt.tx_hash}")
