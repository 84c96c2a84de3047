"""Tests for loading configuration bundled inside a package."""

import tempfile

import pytest

import envreader.store
from envreader.protocol import LoadErrorKind
from envreader.store import ConfigStore


@pytest.fixture
def temp_root(tmp_path, monkeypatch):
    """Redirect tempfile to an empty directory we can inspect."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


class TestLoadFromResource:
    """load_from_resource() anchors, temp copy and failures."""

    def test_package_name_anchor(self, store):
        result = store.load_from_resource("envreader", "resources/sample.xml")

        assert result.ok
        assert result.source == "resource:envreader/resources/sample.xml"
        assert result.entries == 4
        assert store.get("app.name") == "envreader-sample"
        assert store.get("db.pool.size") == "4"

    def test_class_anchor(self, store):
        result = store.load_from_resource(ConfigStore, "resources/sample.yaml")

        assert result.ok
        assert store.get("server.port") == 8080
        assert store.get("server.tls.enabled") is False
        assert store.get("server.tls.certificate") is None
        assert store.get("features") == ["flatten", "merge"]

    def test_module_and_instance_anchor(self, store):
        assert store.load_from_resource(envreader.store, "resources/sample.xml").ok
        assert store.load_from_resource(store, "resources/sample.yaml").ok

    def test_leading_slash_resolves_from_top_level_package(self, store):
        result = store.load_from_resource("envreader.observability", "/resources/sample.yaml")

        assert result.ok
        assert result.source == "resource:envreader/resources/sample.yaml"

    def test_temporary_copy_removed(self, store, temp_root):
        store.load_from_resource("envreader", "resources/sample.xml")

        assert list(temp_root.iterdir()) == []

    def test_history_names_the_resource(self, store):
        store.load_from_resource("envreader", "resources/sample.xml")

        assert store.history[0].source == "resource:envreader/resources/sample.xml"

    def test_missing_resource(self, store):
        result = store.load_from_resource("envreader", "resources/missing.yaml")

        assert result.error is LoadErrorKind.SOURCE_NOT_FOUND
        assert len(store) == 0

    def test_resource_name_too_long(self, store):
        result = store.load_from_resource("envreader", "resources/" + "a" * 5000 + ".yaml")

        assert result.error is LoadErrorKind.SOURCE_NOT_FOUND
        assert len(store) == 0

    def test_unknown_anchor(self, store):
        result = store.load_from_resource("envreader_no_such_package", "app.yaml")

        assert result.error is LoadErrorKind.SOURCE_NOT_FOUND
        assert len(store) == 0

    def test_copy_failure(self, store, temp_root, monkeypatch):
        def _fail(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(envreader.store.shutil, "copyfileobj", _fail)

        result = store.load_from_resource("envreader", "resources/sample.xml")

        assert result.error is LoadErrorKind.COPY_FAILURE
        assert "disk full" in result.message
        assert len(store) == 0
        assert list(temp_root.iterdir()) == []
