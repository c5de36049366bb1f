"""
Transport layer for the wasmtx SDK.

The core pipeline only needs two calls from a node: a generic ABCI query
and a broadcast that waits for block inclusion.
"""
from .base import ChainTransport
from .http import HttpTransport

__all__ = ["ChainTransport", "HttpTransport"]
