from __future__ import annotations

from typing import AbstractSet, Iterable, Sequence


def diff_new_ids(current_ids: Iterable[str], seen_ids: AbstractSet[str]) -> list[str]:
    """Ids from the current fetch that were absent from the previous one, in fetch order."""
    return [reservation_id for reservation_id in current_ids if reservation_id not in seen_ids]


class ArrivalTracker:
    """
    Remembers which ids the console has already seen and which new arrivals
    the operator has not yet looked at.

    The very first observation only primes the seen set; nothing is reported as new.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._unacknowledged: set[str] = set()
        self._primed = False

    @property
    def primed(self) -> bool:
        return self._primed

    @property
    def unacknowledged(self) -> frozenset[str]:
        return frozenset(self._unacknowledged)

    def observe(self, current_ids: Sequence[str]) -> list[str]:
        new_ids = diff_new_ids(current_ids, self._seen) if self._primed else []
        self._unacknowledged.update(new_ids)
        self._seen = set(current_ids)
        self._primed = True
        return new_ids

    def acknowledge(self, reservation_id: str) -> None:
        self._unacknowledged.discard(reservation_id)

    def is_new_arrival(self, reservation_id: str) -> bool:
        return reservation_id in self._unacknowledged
