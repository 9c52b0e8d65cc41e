"""Supported SVM networks and their default RPC endpoints."""

from __future__ import annotations

from enum import Enum


class SVMNetwork(str, Enum):
    """Solana-compatible networks addressable by a payment URL.

    The value of each member doubles as its URL scheme prefix.
    """

    SOLANA = "solana"
    SONIC = "sonic"
    ECLIPSE = "eclipse"
    SOON = "soon"


DEFAULT_RPC_URLS = {
    SVMNetwork.SOLANA: "https://api.mainnet-beta.solana.com",
    SVMNetwork.SONIC: "https://rpc.sonic.game",
    SVMNetwork.ECLIPSE: "https://eclipse.xyz/rpc",
    SVMNetwork.SOON: "https://rpc.soon.network",
}


def network_from_prefix(prefix: str) -> SVMNetwork | None:
    """Map a URL scheme prefix to its network.

    Args:
        prefix: Scheme without the trailing colon (e.g. "solana").

    Returns:
        The matching network, or None if the prefix is not supported.
    """
    try:
        return SVMNetwork(prefix.lower())
    except ValueError:
        return None
