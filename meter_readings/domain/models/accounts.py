"""Domain models for customer accounts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccountRecord:
    """Customer account that meter readings are recorded against."""

    account_id: int
    first_name: str
    last_name: str


__all__ = ["AccountRecord"]
