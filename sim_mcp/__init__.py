"""
Sim API MCP server package.

This package exposes LLM-friendly tools backed by the Sim blockchain-data HTTP
API (EVM and SVM balances, transactions, token prices and supported chains).
See DESIGN.md for full details.
"""

__version__ = "1.0.0"

__all__ = ["config", "__version__"]
