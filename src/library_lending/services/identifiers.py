"""Record identifier minting backed by persisted counters."""

from collections.abc import Iterable

from ..database.record_store import RecordStore


def next_identifier(store: RecordStore, prefix: str, taken: Iterable[str] = ()) -> str:
    """
    Mint the next ``<prefix><n>`` identifier.

    ``n`` comes from the store's monotonic counter for ``prefix``, so ids are
    never re-issued even if records disappear. Values already present in
    ``taken`` (for example rows imported without going through the counter)
    are skipped.
    """
    existing = set(taken)
    while True:
        candidate = f"{prefix}{store.next_sequence(prefix)}"
        if candidate not in existing:
            return candidate
