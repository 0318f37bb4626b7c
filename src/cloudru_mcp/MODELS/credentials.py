"""
Credentials used to obtain bearer tokens and to log in to registries.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    """Long-lived service account key pair."""

    key_id: str
    key_secret: str

    def __repr__(self) -> str:
        return f"Credentials(key_id={self.key_id!r}, key_secret='***')"
