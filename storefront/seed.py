"""Seed script for default storefront settings."""

import sys
from typing import Dict

import yaml
from sqlalchemy.orm import Session

from storefront.core.errors import StoreUnavailable
from storefront.core.settings_store import SettingsStore
from storefront.core.settings_sync import coerce_settings_payload
from storefront.database import SessionLocal


def load_settings_file(yaml_file: str) -> Dict[str, str]:
    """Read the ``settings`` mapping from a YAML file."""
    with open(yaml_file, "r") as f:
        data = yaml.safe_load(f) or {}
    return data.get("settings") or {}


def seed_settings(db: Session, defaults: Dict[str, str]) -> int:
    """Insert settings that are not set yet. Existing values are left alone.

    Returns the number of keys inserted.
    """
    if not defaults:
        return 0
    store = SettingsStore(db)
    existing = store.get_all()
    missing = {k: v for k, v in coerce_settings_payload(defaults).items() if k not in existing}
    for key, value in missing.items():
        store.upsert(key, value)
    return len(missing)


def main(yaml_file: str):
    db: Session = SessionLocal()
    try:
        defaults = load_settings_file(yaml_file)
        if not defaults:
            print("No settings found in YAML file")
            return
        inserted = seed_settings(db, defaults)
        print(f"Seeded {inserted} of {len(defaults)} settings")
    except StoreUnavailable as e:
        print(f"Error seeding settings: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m storefront.seed settings.yaml")
        sys.exit(1)
    main(sys.argv[1])
