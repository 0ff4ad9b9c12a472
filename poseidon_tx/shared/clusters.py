"""Cluster and commitment selection."""

from enum import Enum


class Cluster(Enum):
    """Solana RPC cluster to connect to."""

    LOCALNET = "localnet"
    DEVNET = "devnet"
    TESTNET = "testnet"
    MAINNET_BETA = "mainnet-beta"

    @property
    def url(self) -> str:
        return _CLUSTER_URLS[self]

    @classmethod
    def default(cls) -> "Cluster":
        return cls.DEVNET


_CLUSTER_URLS = {
    Cluster.LOCALNET: "http://127.0.0.1:8899",
    Cluster.DEVNET: "https://api.devnet.solana.com",
    Cluster.TESTNET: "https://api.testnet.solana.com",
    Cluster.MAINNET_BETA: "https://api.mainnet-beta.solana.com",
}


class Commitment(Enum):
    """How finalized a block must be before an RPC node reports on it."""

    PROCESSED = "processed"
    CONFIRMED = "confirmed"
    FINALIZED = "finalized"
    INVALID_COMMITMENT = "invalid_commitment"

    @classmethod
    def default(cls) -> "Commitment":
        return cls.FINALIZED

    @classmethod
    def parse(cls, value: str) -> "Commitment":
        """Parse a commitment level, case-insensitively.

        Unknown values map to INVALID_COMMITMENT rather than raising.
        """
        normalized = value.strip().lower()
        for commitment in (cls.PROCESSED, cls.CONFIRMED, cls.FINALIZED):
            if commitment.value == normalized:
                return commitment
        return cls.INVALID_COMMITMENT
