"""Detection of uploaded files orphaned by a settings change.

Any setting whose key ends with ``_image`` holds a path to a file in the
upload directory, stored as ``/uploads/name.ext`` or ``uploads/name.ext``.
When such a value is replaced, the previous file is no longer referenced and
becomes a cleanup candidate. Nothing here touches the filesystem.
"""

import re
from typing import List, Mapping

ASSET_KEY_SUFFIX = "_image"

_UPLOAD_PREFIX = re.compile(r"^/?uploads/")


def is_asset_key(key: str) -> bool:
    """Check if a setting key holds a reference to an uploaded file."""
    return key.endswith(ASSET_KEY_SUFFIX)


def resolve_upload_path(value: str) -> str:
    """Strip a leading ``/uploads/`` or ``uploads/`` to get a path relative to the upload root."""
    return _UPLOAD_PREFIX.sub("", value, count=1)


def plan_cleanup(existing: Mapping[str, str], incoming: Mapping[str, str]) -> List[str]:
    """
    Compute the upload-relative paths to delete after ``incoming`` is applied.

    A candidate is produced for each asset key in ``incoming`` whose previous
    value was non-empty and differs from the new one. Order follows
    ``incoming``.
    """
    candidates = []
    for key, value in incoming.items():
        if not is_asset_key(key):
            continue
        old_value = existing.get(key)
        if not old_value or old_value == value:
            continue
        candidates.append(resolve_upload_path(old_value))
    return candidates
