"""
lockmint - lock-and-mint integration suite for cross-chain bridge clients.

This package provides:
- workflow: the deposit submission workflow (deposit, attestation, destination)
- events: progress notification streams for long-running bridge operations
- bridge: the bridge client contract and its loader
- chain / wallet: destination chain access and the funding wallet
"""

from lockmint._version import LOCKMINT_VERSION
from lockmint.bridge import BridgeClient, load_bridge_client
from lockmint.chain import ChainClient
from lockmint.config import LockMintConfig, get_config
from lockmint.events import EventStream, PendingOperation, ProgressEvent, ProgressKind
from lockmint.exceptions import (
    AttestationError,
    ConfigurationError,
    DepositWaitError,
    DestinationSubmissionError,
    LockMintError,
    NetworkIdentityMismatch,
    WalletRpcError,
)
from lockmint.models import (
    Asset,
    BridgeSignature,
    Chain,
    ContractParam,
    Deposit,
    LockAndMintParams,
    MintSession,
    SubmissionReceipt,
)
from lockmint.wallet import BitcoindWallet, FundingWallet
from lockmint.workflow import DepositSubmissionWorkflow, run_workflow

__all__ = [
    "LOCKMINT_VERSION",
    # Workflow
    "DepositSubmissionWorkflow",
    "run_workflow",
    # Events
    "EventStream",
    "PendingOperation",
    "ProgressEvent",
    "ProgressKind",
    # Collaborators
    "BridgeClient",
    "load_bridge_client",
    "ChainClient",
    "FundingWallet",
    "BitcoindWallet",
    # Config
    "LockMintConfig",
    "get_config",
    # Models
    "Asset",
    "Chain",
    "ContractParam",
    "LockAndMintParams",
    "MintSession",
    "Deposit",
    "BridgeSignature",
    "SubmissionReceipt",
    # Errors
    "LockMintError",
    "ConfigurationError",
    "NetworkIdentityMismatch",
    "DepositWaitError",
    "AttestationError",
    "DestinationSubmissionError",
    "WalletRpcError",
]
