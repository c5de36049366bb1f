#!/usr/bin/env python3
"""
Query a deployed contract without signing anything.
"""
import json
import os
import sys

from wasmtx_sdk import ChainClient, ChainConfig, NetworkConfig, WasmTxError


def main():
    NETWORK = os.environ.get("WASMTX_NETWORK", "juno-testnet")
    CONTRACT_ADDRESS = os.environ.get("CONTRACT_ADDRESS")
    QUERY = os.environ.get("QUERY", '{"config": {}}')

    if not CONTRACT_ADDRESS:
        print("ERROR: CONTRACT_ADDRESS environment variable is required")
        print("Available networks:")
        for network_name in NetworkConfig.load_networks():
            print(f"  - {network_name}")
        return 1

    config = ChainConfig.from_network(NETWORK)
    try:
        with ChainClient(config) as client:
            result = client.query(CONTRACT_ADDRESS, json.loads(QUERY))
    except WasmTxError as e:
        print(f"Error: {e}")
        return 1

    print(json.dumps(result.as_json(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
