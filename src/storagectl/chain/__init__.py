"""
Chain - on-chain interaction layer.

Provides the JSON-RPC client, the SimpleStorage ABI and binding, and
transaction utilities.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
