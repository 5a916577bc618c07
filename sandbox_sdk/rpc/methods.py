"""
Method surface of the Sui JSON-RPC client, in Python (snake_case) naming.

`SandboxRpcClient` generates an "unsupported" stub for every name listed here
that it does not implement, so the sandbox client exposes the same attributes
as a network client and coverage gaps fail loudly.
"""

from __future__ import annotations

from typing import Tuple

SUI_CLIENT_METHODS: Tuple[str, ...] = (
    # coins
    "get_coins",
    "get_all_coins",
    "get_balance",
    "get_all_balances",
    "get_coin_metadata",
    "get_total_supply",
    # move packages
    "get_move_function_arg_types",
    "get_normalized_move_modules_by_package",
    "get_normalized_move_module",
    "get_normalized_move_function",
    "get_normalized_move_struct",
    # objects
    "get_owned_objects",
    "get_object",
    "try_get_past_object",
    "try_multi_get_past_objects",
    "multi_get_objects",
    "get_dynamic_fields",
    "get_dynamic_field_object",
    # transactions
    "query_transaction_blocks",
    "get_transaction_block",
    "multi_get_transaction_blocks",
    "execute_transaction_block",
    "sign_and_execute_transaction",
    "dry_run_transaction_block",
    "dev_inspect_transaction_block",
    "get_total_transaction_blocks",
    "wait_for_transaction",
    # events
    "query_events",
    "subscribe_event",
    "subscribe_transaction",
    # system state / staking
    "get_reference_gas_price",
    "get_stakes",
    "get_stakes_by_ids",
    "get_latest_sui_system_state",
    "get_committee_info",
    "get_validators_apy",
    "get_current_epoch",
    "get_epochs",
    # checkpoints
    "get_latest_checkpoint_sequence_number",
    "get_checkpoint",
    "get_checkpoints",
    # metrics
    "get_network_metrics",
    "get_address_metrics",
    "get_epoch_metrics",
    "get_all_epoch_address_metrics",
    "get_move_call_metrics",
    # misc
    "get_rpc_api_version",
    "get_chain_identifier",
    "get_protocol_config",
    "resolve_name_service_address",
    "resolve_name_service_names",
    "verify_zk_login_signature",
    "call",
)

# Methods the transaction builder's read-only view must never reach.
MUTATING_METHODS: Tuple[str, ...] = (
    "execute_transaction_block",
    "sign_and_execute_transaction",
)

__all__ = ["SUI_CLIENT_METHODS", "MUTATING_METHODS"]
