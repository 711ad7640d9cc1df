"""Apply a batch of setting changes and clean up the uploads they orphan."""

import logging
from typing import Any, Callable, Dict, List, Optional

from storefront.core.assets import plan_cleanup
from storefront.core.errors import ValidationError
from storefront.core.settings_store import SettingsStore
from storefront.core.uploads import UploadStorage

logger = logging.getLogger(__name__)

Defer = Callable[..., Any]


def _run_now(func: Callable[..., Any], *args: Any) -> None:
    func(*args)


def coerce_settings_payload(payload: Any) -> Dict[str, str]:
    """
    Validate a request body as a flat key/value mapping.

    Primitive values are coerced to strings (None becomes an empty string,
    booleans become ``true``/``false``). Nested values are rejected.
    """
    if not payload:
        raise ValidationError("Settings data required")
    if not isinstance(payload, dict):
        raise ValidationError("Settings must be a flat key/value object")

    coerced = {}
    for key, value in payload.items():
        if not isinstance(key, str) or not key.strip():
            raise ValidationError("Setting keys must be non-empty strings")
        if value is None:
            coerced[key] = ""
        elif isinstance(value, bool):
            coerced[key] = "true" if value else "false"
        elif isinstance(value, (str, int, float)):
            coerced[key] = str(value)
        else:
            raise ValidationError(f"Setting '{key}' must be a string, number or boolean")
    return coerced


class SettingsSync:
    """
    Request-scoped settings update workflow.

    The snapshot is read before any write so cleanup is planned against the
    previous values. Upserts are applied one by one; the first failure stops
    the batch and propagates, and no cleanup is attempted for it. Cleanup is
    handed to ``defer`` (inline by default, a background task in the API) and
    can never turn a saved update into a failure.
    """

    def __init__(self, store: SettingsStore, storage: UploadStorage, defer: Optional[Defer] = None):
        self.store = store
        self.storage = storage
        self.defer = defer or _run_now

    def apply_settings_update(self, incoming: Any) -> List[str]:
        """Persist ``incoming`` and schedule deletion of replaced uploads.

        Returns the upload-relative paths scheduled for deletion.
        """
        changes = coerce_settings_payload(incoming)

        snapshot = self.store.get_all()

        for key, value in changes.items():
            self.store.upsert(key, value)
        logger.info(f"Settings updated: {len(changes)} key(s)")

        candidates = plan_cleanup(snapshot, changes)
        for path in candidates:
            self._schedule_cleanup(path)
        return candidates

    def _schedule_cleanup(self, path: str) -> None:
        try:
            self.defer(self.storage.delete_if_exists, path)
        except Exception as e:
            logger.error(f"Could not schedule cleanup of {path}: {e}")
