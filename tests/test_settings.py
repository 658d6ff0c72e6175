"""
Tests for credential validation and the setup value.
"""

import pytest

from elo_bs_manager.extension import BsManagerExtension
from elo_bs_manager.project import Project
from elo_bs_manager.settings import ConfigurationError, SetupConfig, validate_properties


class TestValidateProperties:
    def test_returns_base_config(self, credentials):
        cfg = validate_properties(credentials)

        assert cfg.ix_url == "http://elo.example.com:9090/ix-Archive/ix"
        assert cfg.username == "Administrator"
        assert cfg.password == "elo"
        assert cfg.language is None

    def test_first_missing_property_is_reported(self):
        with pytest.raises(ConfigurationError, match="^elo.server.ixUrl is not set$"):
            validate_properties({})

    def test_values_are_stringified(self, credentials):
        credentials["elo.server.password"] = 1234
        credentials["elo.server.language"] = "en"

        cfg = validate_properties(credentials)

        assert cfg.password == "1234"
        assert cfg.language == "en"

    def test_empty_string_is_present(self, credentials):
        credentials["elo.server.password"] = ""
        assert validate_properties(credentials).password == ""

    def test_password_hidden_from_repr(self, credentials):
        credentials["elo.server.password"] = "hunter2"
        assert "hunter2" not in repr(validate_properties(credentials))

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_properties({})


class TestSetupConfig:
    def test_paths_are_absolute(self, tmp_path, monkeypatch, credentials):
        monkeypatch.chdir(tmp_path)
        cfg = SetupConfig.create(bs_urls=[], properties=credentials, build_dir="out")

        assert cfg.downloads_dir == tmp_path.resolve() / "out" / "downloads"
        assert cfg.work_dir == tmp_path.resolve() / "out" / "_work"

    def test_snapshot_is_independent_of_host_state(self, tmp_path, credentials):
        project = Project(properties=credentials, build_dir=tmp_path)
        ext = BsManagerExtension()
        urls = ["https://example.com/a.eloinst"]
        ext.set_bs_urls(urls)

        cfg = SetupConfig.from_project(project, ext)
        urls.append("https://example.com/b.eloinst")
        project.properties["elo.server.username"] = "someone-else"

        assert cfg.bs_urls == ("https://example.com/a.eloinst",)
        assert cfg.properties["elo.server.username"] == "Administrator"
        with pytest.raises(TypeError):
            cfg.properties["elo.server.username"] = "x"

    def test_unset_urls_stay_unset(self, tmp_path, credentials):
        cfg = SetupConfig.from_project(Project(properties=credentials, build_dir=tmp_path), BsManagerExtension())
        assert cfg.bs_urls is None


class TestExtension:
    def test_accepts_anything_without_validation(self):
        ext = BsManagerExtension()
        assert ext.get_bs_urls() is None

        ext.set_bs_urls([])
        assert ext.get_bs_urls() == []

        ext.set_bs_urls(None)
        assert ext.bs_urls is None
