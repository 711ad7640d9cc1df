"""Tests for upload reference tracking."""

from storefront.core.assets import is_asset_key, plan_cleanup, resolve_upload_path


def test_is_asset_key():
    """Only keys ending in _image reference uploads."""
    assert is_asset_key("home_about_image") is True
    assert is_asset_key("company_name") is False
    assert is_asset_key("image_caption") is False


def test_resolve_upload_path():
    """Upload prefixes are stripped once, other values are kept as-is."""
    assert resolve_upload_path("/uploads/a.jpg") == "a.jpg"
    assert resolve_upload_path("uploads/a.jpg") == "a.jpg"
    assert resolve_upload_path("a.jpg") == "a.jpg"
    assert resolve_upload_path("/uploads/uploads/a.jpg") == "uploads/a.jpg"
    assert resolve_upload_path("/Uploads/a.jpg") == "/Uploads/a.jpg"
    assert resolve_upload_path("http://cdn.example.com/a.jpg") == "http://cdn.example.com/a.jpg"


def test_plan_cleanup_changed_image():
    """A replaced image yields its previous file."""
    existing = {"logo_image": "/uploads/old.jpg"}
    incoming = {"logo_image": "/uploads/new.jpg"}

    assert plan_cleanup(existing, incoming) == ["old.jpg"]


def test_plan_cleanup_unchanged_image():
    """Writing the same value again is not a replacement."""
    existing = {"logo_image": "/uploads/a.jpg"}
    incoming = {"logo_image": "/uploads/a.jpg"}

    assert plan_cleanup(existing, incoming) == []


def test_plan_cleanup_first_assignment():
    """Missing or empty previous values never produce candidates."""
    assert plan_cleanup({}, {"x_image": "/uploads/a.jpg"}) == []
    assert plan_cleanup({"x_image": ""}, {"x_image": "/uploads/a.jpg"}) == []


def test_plan_cleanup_ignores_other_keys():
    """Non-image keys never trigger cleanup, whatever their value."""
    existing = {"company_name": "uploads/old.jpg"}
    incoming = {"company_name": "Acme"}

    assert plan_cleanup(existing, incoming) == []


def test_plan_cleanup_follows_incoming_order():
    """Candidates come out in the order of the incoming changes."""
    existing = {
        "a_image": "/uploads/a.jpg",
        "b_image": "uploads/b.jpg",
        "c_image": "/uploads/c.jpg",
    }
    incoming = {
        "c_image": "/uploads/c2.jpg",
        "company_name": "Acme",
        "a_image": "",
        "b_image": "uploads/b.jpg",
    }

    assert plan_cleanup(existing, incoming) == ["c.jpg", "a.jpg"]
