"""Tests for default settings seeding."""

from storefront.core.settings_store import SettingsStore
from storefront.seed import load_settings_file, seed_settings


def test_load_settings_file(tmp_path):
    """The settings mapping is read from YAML."""
    path = tmp_path / "settings.yaml"
    path.write_text("settings:\n  company_name: Acme\n  company_phone: 5550100\n")

    assert load_settings_file(str(path)) == {"company_name": "Acme", "company_phone": 5550100}


def test_load_settings_file_without_settings(tmp_path):
    """Files without a settings section yield nothing."""
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert load_settings_file(str(path)) == {}


def test_seed_settings_keeps_existing_values(db):
    """Seeding only fills in keys that are not set yet."""
    store = SettingsStore(db)
    store.upsert("company_name", "Existing Co")

    inserted = seed_settings(db, {"company_name": "Acme", "company_phone": 5550100, "home_about_image": None})

    assert inserted == 2
    assert store.get_all() == {
        "company_name": "Existing Co",
        "company_phone": "5550100",
        "home_about_image": "",
    }
    assert seed_settings(db, {}) == 0
