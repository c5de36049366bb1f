#!/usr/bin/env python3
"""
Deploy a CosmWasm contract and interact with it.
"""
import logging
import os
import sys

from wasmtx_sdk import ChainClient, ChainConfig, LocalSigner, WasmTxError


def main():
    """
    Demonstrate the full contract lifecycle.

    This example shows how to:
    1. Build a config from a bundled network preset
    2. Upload a wasm module
    3. Instantiate, execute and query the contract
    """
    NETWORK = os.environ.get("WASMTX_NETWORK", "local")
    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")
    WASM_FILE = os.environ.get("WASM_FILE")

    if not PRIVATE_KEY:
        print("ERROR: PRIVATE_KEY environment variable is required")
        return 1
    if not WASM_FILE:
        print("ERROR: WASM_FILE environment variable is required")
        return 1

    logging.basicConfig(level=logging.INFO)

    config = ChainConfig.from_network(NETWORK)
    signer = LocalSigner(PRIVATE_KEY)
    print(f"Deploying from {signer.address(config.prefix)} on {config.chain_id}")

    with open(WASM_FILE, "rb") as f:
        wasm = f.read()

    try:
        with ChainClient(config) as client:
            stored = client.store(wasm, signer)
            print(f"Code id: {stored.code_id} (tx {stored.commit.tx_hash})")

            created = client.instantiate(stored.code_id, {"count": 0}, signer, label="counter")
            print(f"Contract address: {created.address}")

            executed = client.execute(created.address, {"increment": {}}, signer)
            print(f"Increment tx: {executed.commit.tx_hash}")

            result = client.query(created.address, {"get_count": {}})
            print(f"Count: {result.as_json()}")
    except WasmTxError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
