import sqlite3

from databases import Database

from mealremix.domain.errors import PersistenceError


CREATE_KEY_VALUES_TABLE = """
CREATE TABLE IF NOT EXISTS KeyValues (key VARCHAR(256) PRIMARY KEY, value TEXT)
"""


GET_VALUE = "SELECT value FROM KeyValues WHERE key = :key"


SET_VALUE = """
INSERT OR REPLACE INTO KeyValues(key, value) VALUES (:key, :value)
"""


class KeyValueStore:
    """String slots keyed by name, one row each."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create(self) -> None:
        try:
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                query=CREATE_KEY_VALUES_TABLE
            )
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError("Could not create the key-value table.") from e

    async def get(self, key: str) -> str | None:
        try:
            result = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
                GET_VALUE, values={"key": key}
            )
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Could not read {key!r}.") from e

        if result is None:
            return None
        return result["value"]

    async def set(self, key: str, value: str) -> None:
        try:
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                SET_VALUE, values={"key": key, "value": value}
            )
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Could not write {key!r}.") from e
