"""Transactional persistence for Key records."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from sqlalchemy import Row, false, insert, literal, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from tsg.core.base import BaseService
from tsg.core.constants import SENTINEL_KEY_ID
from tsg.core.exceptions import (
    MissingAccountIDError,
    MissingIdentityError,
    MissingIDError,
    TransactionError,
    TransactionPhase,
)
from tsg.database.models import KeyRecord
from .key import Key

keys_table = KeyRecord.__table__


class KeyStore(BaseService):
    """Insert, save and existence checks for the tsg_keys table.

    Every write runs in its own transaction. Names are only unique among
    non-archived keys by convention: callers check ``exists`` before
    ``insert``, nothing in the schema enforces it.
    """

    def new_key(self, **fields) -> Key:
        return Key.new(self, **fields)

    async def insert(self, key: Key) -> None:
        """Insert a new key, then read the row back for its generated fields."""
        if not key.account_id:
            raise MissingAccountIDError()

        operation = "insert key"
        now = datetime.now(timezone.utc)
        stmt = insert(keys_table).values(
            name=key.name,
            fingerprint=key.fingerprint,
            material=key.material,
            account_id=key.account_id,
            archived=key.archived,
            created_at=now,
            updated_at=now,
        )

        async with self._transaction(operation) as connection:
            try:
                await connection.execute(stmt)
            except SQLAlchemyError as exc:
                raise TransactionError(operation, TransactionPhase.INSERT, exc) from exc
            await self._commit(connection, operation)

        # Confirmation read, outside the committed transaction
        try:
            stored = await self._fetch_by_name(key.name, key.account_id)
        except SQLAlchemyError as exc:
            raise TransactionError(
                operation, TransactionPhase.POST_INSERT_LOOKUP, exc
            ) from exc
        if stored is None:
            raise TransactionError(operation, TransactionPhase.POST_INSERT_LOOKUP)

        key.id = stored.id
        key.created_at = stored.created_at
        key.updated_at = stored.updated_at

        self.logger.info(f"Inserted key '{key.name}' for account {key.account_id}")

    async def save(self, key: Key) -> None:
        """Persist the mutable fields of an already inserted key."""
        if not key.id:
            raise MissingIDError()

        operation = "save key"
        updated_at = datetime.now(timezone.utc)
        stmt = (
            update(keys_table)
            .where(keys_table.c.id == key.id)
            .values(
                name=key.name,
                fingerprint=key.fingerprint,
                material=key.material,
                archived=key.archived,
                updated_at=updated_at,
            )
        )

        async with self._transaction(operation) as connection:
            try:
                await connection.execute(stmt)
            except SQLAlchemyError as exc:
                raise TransactionError(operation, TransactionPhase.UPDATE, exc) from exc
            await self._commit(connection, operation)

        key.updated_at = updated_at

        self.logger.info(f"Saved key {key.id}")

    async def exists(self, key: Key) -> bool:
        """Return True if a non-archived key matches the key's id or name."""
        if not key.name and not key.id:
            raise MissingIdentityError()

        # Sentinel never matches, leaving a name-only comparison
        key_id = key.id or SENTINEL_KEY_ID

        stmt = (
            select(literal(1))
            .select_from(keys_table)
            .where(
                or_(keys_table.c.id == key_id, keys_table.c.name == key.name),
                keys_table.c.archived == false(),
            )
            .limit(1)
        )

        try:
            async with self.engine.connect() as connection:
                result = await connection.execute(stmt)
                row = result.first()
        except SQLAlchemyError as exc:
            raise TransactionError(
                "check key existence", TransactionPhase.EXISTS, exc
            ) from exc

        return row is not None

    async def find_by_name(self, name: str, account_id: str) -> Key | None:
        """Find the most recently created key with this name for the account."""
        try:
            row = await self._fetch_by_name(name, account_id)
        except SQLAlchemyError as exc:
            raise TransactionError(
                "find key by name", TransactionPhase.LOOKUP, exc
            ) from exc
        return self._to_key(row) if row is not None else None

    async def find_by_id(self, key_id: str) -> Key | None:
        stmt = select(keys_table).where(keys_table.c.id == key_id)
        try:
            async with self.engine.connect() as connection:
                result = await connection.execute(stmt)
                row = result.first()
        except SQLAlchemyError as exc:
            raise TransactionError(
                "find key by id", TransactionPhase.LOOKUP, exc
            ) from exc
        return self._to_key(row) if row is not None else None

    async def _fetch_by_name(self, name: str, account_id: str) -> Row | None:
        stmt = (
            select(keys_table)
            .where(
                keys_table.c.name == name,
                keys_table.c.account_id == account_id,
            )
            .order_by(keys_table.c.created_at.desc())
            .limit(1)
        )
        async with self.engine.connect() as connection:
            result = await connection.execute(stmt)
            return result.first()

    def _to_key(self, row: Row) -> Key:
        return Key(
            id=row.id,
            name=row.name,
            fingerprint=row.fingerprint,
            material=row.material,
            account_id=row.account_id,
            archived=row.archived,
            created_at=row.created_at,
            updated_at=row.updated_at,
            store=self,
        )

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncConnection]:
        """Check out a connection and begin a transaction on it.

        Whatever is still uncommitted when the block exits is rolled back.
        """
        try:
            connection = await self.engine.connect()
        except (SQLAlchemyError, OSError) as exc:
            raise TransactionError(operation, TransactionPhase.BEGIN, exc) from exc

        try:
            try:
                await connection.begin()
            except SQLAlchemyError as exc:
                raise TransactionError(operation, TransactionPhase.BEGIN, exc) from exc
            yield connection
        finally:
            await self._rollback(connection, operation)
            await connection.close()

    async def _commit(self, connection: AsyncConnection, operation: str) -> None:
        try:
            await connection.commit()
        except SQLAlchemyError as exc:
            raise TransactionError(operation, TransactionPhase.COMMIT, exc) from exc

    async def _rollback(self, connection: AsyncConnection, operation: str) -> None:
        # No-op once the transaction has been committed
        if not connection.in_transaction():
            return
        try:
            await connection.rollback()
        except SQLAlchemyError as exc:
            self.logger.warning(
                "Rollback failed", operation=operation, error=str(exc)
            )
