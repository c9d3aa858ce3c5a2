"""配置加载测试"""

import os

import pytest

from folio.config import (
    AppSettings,
    ConfigLoader,
    JWTSettings,
    UploadSettings,
    load_env_file,
    load_yaml_config,
    set_env_from_file,
)


@pytest.fixture(autouse=True)
def clear_config_cache():
    ConfigLoader.clear_cache()
    yield
    ConfigLoader.clear_cache()


@pytest.fixture
def yaml_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "app_name: Ada's Portfolio\n"
        "allow_registration: true\n"
        "database:\n"
        "  url: \"sqlite:///:memory:\"\n"
        "content:\n"
        "  cache_ttl_seconds: 60\n"
        "upload:\n"
        "  max_image_size: 2MB\n",
        encoding="utf-8",
    )
    return path


class TestConfigLoader:
    """YAML 加载测试"""

    def test_load_and_cache(self, yaml_file):
        config = ConfigLoader.load(str(yaml_file))
        assert config["app_name"] == "Ada's Portfolio"
        assert ConfigLoader.load(str(yaml_file)) is config
        assert str(yaml_file) in ConfigLoader.get_cached_paths()

    def test_reload(self, yaml_file):
        """测试 reload 忽略缓存"""
        first = ConfigLoader.load(str(yaml_file))
        yaml_file.write_text("app_name: Changed\n", encoding="utf-8")
        assert ConfigLoader.load(str(yaml_file)) is first
        assert ConfigLoader.reload(str(yaml_file))["app_name"] == "Changed"

    def test_base_dir(self, yaml_file):
        config = ConfigLoader.load("settings.yaml", base_dir=str(yaml_file.parent))
        assert config["allow_registration"] is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(str(tmp_path / "missing.yaml"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert ConfigLoader.load(str(path)) == {}


class TestLoadYamlConfig:
    """YAML 转 Settings 测试"""

    def test_nested_settings(self, yaml_file):
        settings = load_yaml_config(str(yaml_file), AppSettings)
        assert settings.app_name == "Ada's Portfolio"
        assert settings.database.url == "sqlite:///:memory:"
        assert settings.content.cache_ttl_seconds == 60
        assert settings.content.sample_fallback is True
        assert settings.upload.parsed_max_image_size == 2 * 1024 * 1024

    def test_overrides_do_not_touch_cache(self, yaml_file):
        """测试 overrides 不修改缓存中的配置"""
        settings = load_yaml_config(str(yaml_file), AppSettings, debug=True)
        assert settings.debug is True
        assert "debug" not in ConfigLoader.load(str(yaml_file))


class TestEnvironment:
    """环境变量测试"""

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FOLIO_JWT_SECRET_KEY", "from-env")
        monkeypatch.setenv("FOLIO_UPLOAD_MAX_DOCUMENT_SIZE", "1MB")
        assert JWTSettings().secret_key == "from-env"
        assert UploadSettings().parsed_max_document_size == 1024 * 1024

    def test_load_env_file(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text(
            "# comment\n"
            "FOLIO_APP_NAME='Quoted'\n"
            "FOLIO_DEBUG = true\n"
            "not a pair\n",
            encoding="utf-8",
        )
        assert load_env_file(str(path)) == {"FOLIO_APP_NAME": "Quoted", "FOLIO_DEBUG": "true"}
        assert load_env_file(str(tmp_path / "missing.env")) == {}

    def test_set_env_from_file(self, tmp_path, monkeypatch):
        """测试默认不覆盖已有环境变量"""
        path = tmp_path / ".env"
        path.write_text("FOLIO_TEST_A=file\nFOLIO_TEST_B=file\n", encoding="utf-8")
        monkeypatch.setenv("FOLIO_TEST_A", "existing")
        monkeypatch.setenv("FOLIO_TEST_B", "placeholder")
        monkeypatch.delenv("FOLIO_TEST_B")

        set_env_from_file(str(path))
        assert os.environ["FOLIO_TEST_A"] == "existing"
        assert os.environ["FOLIO_TEST_B"] == "file"
