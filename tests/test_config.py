"""Tests for configuration loading and the catalog wiring."""

import shutil
import tempfile
from pathlib import Path

import pytest

from catobase.core.catalog import Catalog
from catobase.core.config import AppConfig, ConfigManager, RegistryConfig, REGISTRY_ENV_VAR
from catobase.core.exceptions import ConfigurationError


class TestConfigManager:
    """Test INI configuration handling."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.config_file = self.temp_dir / "config.ini"

    def teardown_method(self):
        """Clean up test environment."""
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_defaults_without_file(self, monkeypatch):
        """Test that a missing file leaves defaults and is not created."""
        monkeypatch.delenv(REGISTRY_ENV_VAR, raising=False)
        manager = ConfigManager(self.config_file)

        assert manager.get_config().registry.path == Path(".catodb")
        assert manager.get_config().registry.categories_file is None
        assert not self.config_file.exists()

    def test_load_registry_section(self, monkeypatch):
        """Test reading registry settings from file."""
        monkeypatch.delenv(REGISTRY_ENV_VAR, raising=False)
        self.config_file.write_text(
            "[registry]\n"
            "path = /tmp/registry.catodb\n"
            "categories_file = /tmp/categories.txt\n"
            "snapshot_suffix = .bak\n"
            "[web]\n"
            "port = 8080\n"
        )

        config = ConfigManager(self.config_file).get_config()

        assert config.registry.path == Path("/tmp/registry.catodb")
        assert config.registry.categories_file == Path("/tmp/categories.txt")
        assert config.registry.snapshot_suffix == ".bak"
        assert config.web.port == 8080

    def test_environment_overrides_file(self, monkeypatch):
        """Test that CATOBASE_REGISTRY wins over the file."""
        self.config_file.write_text("[registry]\npath = from_file.catodb\n")
        monkeypatch.setenv(REGISTRY_ENV_VAR, str(self.temp_dir / "env.catodb"))

        config = ConfigManager(self.config_file).get_config()

        assert config.registry.path == self.temp_dir / "env.catodb"

    def test_invalid_value(self):
        """Test that a malformed file raises ConfigurationError."""
        self.config_file.write_text("[web]\nport = not-a-number\n")

        with pytest.raises(ConfigurationError):
            ConfigManager(self.config_file)

    def test_set_value_saves_file(self, monkeypatch):
        """Test setting a dotted key and reading it back."""
        monkeypatch.delenv(REGISTRY_ENV_VAR, raising=False)
        manager = ConfigManager(self.config_file)

        assert manager.set_value("web.port", "7000") == 7000
        manager.set_value("registry.categories_file", "cats.txt")

        reloaded = ConfigManager(self.config_file).get_config()
        assert reloaded.web.port == 7000
        assert reloaded.registry.categories_file == Path("cats.txt")

    def test_set_unknown_key(self):
        """Test that unknown keys are rejected."""
        manager = ConfigManager(self.config_file)

        with pytest.raises(ConfigurationError):
            manager.set_value("registry.nope", "1")
        with pytest.raises(ConfigurationError):
            manager.set_value("registry", "1")


class TestCatalog:
    """Test building the components from configuration."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.config = AppConfig(registry=RegistryConfig(path=self.temp_dir / ".catodb"))

    def teardown_method(self):
        """Clean up test environment."""
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_registry_path_from_config(self):
        catalog = Catalog(config=self.config)

        assert catalog.registry_path == self.temp_dir / ".catodb"
        assert catalog.known_categories() is None

    def test_separate_catalogs_are_isolated(self):
        """Test two registries side by side in one process."""
        subject = self.temp_dir / "report.txt"
        subject.write_text("content")
        first = Catalog(self.temp_dir / "first.catodb", config=self.config)
        second = Catalog(self.temp_dir / "second.catodb", config=self.config)
        first.initialize()
        second.initialize()

        first.register_file(str(subject), ["Work"])

        assert first.get("report", ["Work"]) == [str(subject)]
        assert second.get("report", []) == []

    def test_reference_listing_validates_registrations(self):
        """Test that the configured listing supplies the known categories."""
        from catobase.core.exceptions import InvalidCategoriesError

        listing = self.temp_dir / "categories.txt"
        listing.write_text("Books\nMovies\n")
        subject = self.temp_dir / "novel.txt"
        subject.write_text("content")
        catalog = Catalog(categories_file=listing, config=self.config)
        catalog.initialize()

        catalog.register_file(str(subject), ["Books"])
        with pytest.raises(InvalidCategoriesError):
            catalog.register_file(str(subject), ["Music"])

        assert catalog.known_categories() == ["Books", "Movies"]
        assert len(catalog.registry.scan()) == 1
