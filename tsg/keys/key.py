"""Key record bound to the store that persists it."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .store import KeyStore


@dataclass
class Key:
    """Data associated with a tsg_keys row.

    An empty ``id`` means the key has never been inserted. ``created_at`` and
    ``updated_at`` are only ever set by the store.
    """

    id: str | None = None
    name: str = ""
    fingerprint: str = ""
    material: str = ""
    account_id: str = ""
    archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    store: "KeyStore | None" = field(default=None, repr=False, compare=False)

    @classmethod
    def new(cls, store: "KeyStore", **fields) -> "Key":
        """Construct a new Key with the store used for persistence."""
        return cls(store=store, **fields)

    @property
    def is_persisted(self) -> bool:
        return bool(self.id)

    async def insert(self) -> None:
        await self._require_store().insert(self)

    async def save(self) -> None:
        await self._require_store().save(self)

    async def exists(self) -> bool:
        return await self._require_store().exists(self)

    def _require_store(self) -> "KeyStore":
        if self.store is None:
            raise RuntimeError("Key is not bound to a KeyStore")
        return self.store
