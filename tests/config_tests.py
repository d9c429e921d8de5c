from pathlib import Path

import pytest
import yaml

from myaquinas import DEFAULT_USER_AGENT, AppConfig, EnvConfig, PathConfig


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MYAQUINAS_AUTH_URL", "https://site/api/Authenticate")
    monkeypatch.setenv("MYAQUINAS_API_TEMPLATE_URL", "https://site/api/{0}/{1}")
    monkeypatch.setenv("MYAQUINAS_XML_NAMESPACE", "urn:x")
    monkeypatch.delenv("MYAQUINAS_USER_AGENT", raising=False)


def _create_config_file(path: Path, **extra) -> Path:
    path.write_text(yaml.dump({**EnvConfig().as_dict(), **extra}), encoding="utf8")
    return path


def test_env_config(env):
    sut = EnvConfig()
    sut.validate()

    assert sut.auth_url == "https://site/api/Authenticate"
    assert sut.api_template_url == "https://site/api/{0}/{1}"
    assert sut.xml_namespace == "urn:x"
    assert sut.user_agent == DEFAULT_USER_AGENT


@pytest.mark.parametrize("make_empty", ["MYAQUINAS_AUTH_URL", "MYAQUINAS_API_TEMPLATE_URL"])
def test_env_config_empty(env, monkeypatch, make_empty):
    monkeypatch.delenv(make_empty)

    with pytest.raises(RuntimeError, match="Please verify and correct these attributes"):
        EnvConfig().validate()


def test_env_config_namespace_is_optional(env, monkeypatch):
    monkeypatch.delenv("MYAQUINAS_XML_NAMESPACE")

    sut = EnvConfig()
    sut.validate()

    assert sut.xml_namespace == ""


def test_all_missing_fields_are_reported(monkeypatch):
    monkeypatch.delenv("MYAQUINAS_AUTH_URL", raising=False)
    monkeypatch.delenv("MYAQUINAS_API_TEMPLATE_URL", raising=False)

    with pytest.raises(RuntimeError, match=r"\['auth_url', 'api_template_url'\]"):
        EnvConfig().validate()


@pytest.mark.parametrize("template", ["https://site/api/{0}", "https://site/api/{1}", "https://site/api/"])
def test_template_needs_both_placeholders(template: str):
    with pytest.raises(RuntimeError, match="api_template_url"):
        AppConfig(auth_url="https://site/auth", api_template_url=template).validate()


def test_validate_strips_whitespace():
    sut = AppConfig(auth_url="  https://site/auth \n", api_template_url=" https://site/{0}/{1} ", user_agent="  ")
    sut.validate()

    assert sut.auth_url == "https://site/auth"
    assert sut.api_template_url == "https://site/{0}/{1}"
    assert sut.user_agent == DEFAULT_USER_AGENT


@pytest.mark.parametrize("as_type", [Path, str])
def test_path_config(env, tmp_path: Path, as_type: type):
    config_file = _create_config_file(tmp_path / "config.yml")

    sut = PathConfig(as_type(config_file))
    sut.validate()

    assert sut.filename == config_file
    assert sut.auth_url == "https://site/api/Authenticate"
    assert sut.xml_namespace == "urn:x"
    assert sut.other_info == {}


def test_path_config_without_path(env, tmp_path: Path):
    _create_config_file(tmp_path / PathConfig.CONFIG_FILENAME)

    sut = PathConfig()
    sut.validate()

    assert sut.api_template_url == "https://site/api/{0}/{1}"


def test_path_config_in_cache_dir(env, tmp_path: Path):
    cache_dir = tmp_path / ".cache/myaquinas"
    cache_dir.mkdir(parents=True)
    sub_dir = tmp_path / "elsewhere"
    sub_dir.mkdir()
    _create_config_file(cache_dir / PathConfig.CONFIG_FILENAME)

    sut = PathConfig(sub_dir / PathConfig.CONFIG_FILENAME)

    assert sut.filename == cache_dir / PathConfig.CONFIG_FILENAME


def test_path_config_file_not_found(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        PathConfig(tmp_path / "not_found.yml")


def test_config_exporting_as_dict_with_other_info(env, tmp_path: Path):
    sut = PathConfig(_create_config_file(tmp_path / "config.yml", school="aquinas"))

    assert sut.as_dict() == {
        "auth_url": "https://site/api/Authenticate",
        "api_template_url": "https://site/api/{0}/{1}",
        "xml_namespace": "urn:x",
        "user_agent": DEFAULT_USER_AGENT,
        "other_info": {"school": "aquinas"},
    }


def test_config_exporting_as_dict_without_other_info(env):
    assert EnvConfig().as_dict() == {
        "auth_url": "https://site/api/Authenticate",
        "api_template_url": "https://site/api/{0}/{1}",
        "xml_namespace": "urn:x",
        "user_agent": DEFAULT_USER_AGENT,
    }
