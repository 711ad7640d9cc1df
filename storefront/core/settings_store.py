"""Key/value settings store backed by the ``settings`` table."""

import logging
from datetime import datetime
from typing import Dict

from sqlalchemy import select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.errors import StoreUnavailable
from storefront.models.setting import Setting

logger = logging.getLogger(__name__)


class SettingsStore:
    """Bulk read and per-key upsert over the settings table.

    Every ``upsert`` is committed on its own, so a batch of upserts is not
    transactional as a whole.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_all(self) -> Dict[str, str]:
        """Return every setting as a flat ``{key: value}`` mapping."""
        try:
            rows = self.session.execute(select(Setting.key, Setting.value)).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error reading settings: {e}")
            raise StoreUnavailable(str(e)) from e
        return {key: value for key, value in rows}

    def get(self, key: str):
        """Return a single value, or None when the key has never been set."""
        try:
            return self.session.execute(
                select(Setting.value).where(Setting.key == key)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error reading setting {key}: {e}")
            raise StoreUnavailable(str(e)) from e

    def upsert(self, key: str, value: str) -> None:
        """Insert ``key`` or overwrite its value, atomically for that key."""
        try:
            stmt = self._upsert_statement(key, value)
            if stmt is not None:
                self.session.execute(stmt)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error upserting setting {key}: {e}")
            raise StoreUnavailable(str(e)) from e

    def _upsert_statement(self, key: str, value: str):
        now = datetime.utcnow()
        dialect = self.session.get_bind().dialect.name

        if dialect in ("postgresql", "sqlite"):
            insert = pg_insert if dialect == "postgresql" else sqlite_insert
            stmt = insert(Setting).values(key=key, value=value, updated_at=now)
            return stmt.on_conflict_do_update(
                index_elements=[Setting.key],
                set_={"value": stmt.excluded["value"], "updated_at": stmt.excluded["updated_at"]},
            )

        if dialect in ("mysql", "mariadb"):
            stmt = mysql_insert(Setting).values(key=key, value=value, updated_at=now)
            return stmt.on_duplicate_key_update(
                value=stmt.inserted["value"],
                updated_at=stmt.inserted["updated_at"],
            )

        # No native upsert: fall back to read-then-write in the ORM.
        setting = self.session.execute(
            select(Setting).where(Setting.key == key)
        ).scalar_one_or_none()
        if setting:
            setting.value = value
            setting.updated_at = now
        else:
            self.session.add(Setting(key=key, value=value, updated_at=now))
        return None
