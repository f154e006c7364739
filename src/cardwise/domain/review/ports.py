"""
Ports (interfaces) for review record persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import CardReviewRecord


class ReviewStoreError(Exception):
    """Raised by store adapters when the backing storage cannot be read or written."""


class ReviewStore(ABC):
    """
    Port for durable card review records, keyed by card id.

    Implementations:
        - InMemoryReviewStore: Process-local dictionary.
        - JsonFileReviewStore: Single JSON document on disk.
    """

    @abstractmethod
    def get(self, card_id: str) -> CardReviewRecord | None:
        """
        Fetch the record for a card.

        Returns:
            The stored record, or None if the card has never been stored.
        """
        pass

    @abstractmethod
    def put(self, record: CardReviewRecord) -> None:
        """
        Store a record under ``record.card_id``, replacing any previous one.
        """
        pass

    @abstractmethod
    def get_all(self) -> dict[str, CardReviewRecord]:
        """
        Snapshot of every stored record.

        Returns:
            A new dict of card id -> record; mutating it does not affect the store.
        """
        pass

    @abstractmethod
    def delete(self, card_id: str) -> bool:
        """
        Remove a card's record.

        Returns:
            True if a record was removed, False if none existed.
        """
        pass
