import pytest

from potions import configs


def test_packaged_settings_load():
    settings = configs.load_settings()
    assert settings["project"]["name"] == "potions"
    assert settings["auth"]["token_ttl_seconds"] == 86400
    assert settings["mongodb"]["potions_collection"] == "potions"


def test_custom_settings_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("web_server:\n  port: 8080\n", encoding="utf-8")
    assert configs.load_settings(str(path)) == {"web_server": {"port": 8080}}

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert configs.load_settings(str(empty)) == {}


def test_missing_settings_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        configs.load_settings(str(tmp_path / "nope.yaml"))


def test_module_constants_have_sane_types():
    assert isinstance(configs.WEBSERVER_PORT, int)
    assert isinstance(configs.TOKEN_TTL_SECONDS, int)
    assert configs.DB_BACKEND in {"mongodb", "memory"}
    assert configs.COOKIE_NAME
