from pathlib import Path
from typing import Callable
from uuid import UUID

import pytest

from myaquinas import AppConfig, MyAquinas


@pytest.fixture
def tmp_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Enhanced tmp_path fixture that changes working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _home_in_tmp_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep cached tokens and traces out of the real home directory."""
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)


@pytest.fixture
def token() -> UUID:
    return UUID("0f8fad5b-d9cb-469f-a165-70867728950e")


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        auth_url="https://site/api/Authenticate",
        api_template_url="https://site/api/{0}/{1}",
        xml_namespace="http://schemas.datacontract.org/2004/07/MyAquinas",
    )


@pytest.fixture
def token_response(token: UUID, config: AppConfig) -> Callable[..., str]:
    """Build the body the server answers a successful login with."""

    def make(token_text: str = str(token), namespace: str = config.xml_namespace) -> str:
        return f'<AuthResult xmlns="{namespace}"><AdmissionNo>12345678</AdmissionNo><Token>{token_text}</Token></AuthResult>'

    return make


@pytest.fixture
def session(config: AppConfig) -> MyAquinas:
    """An unauthenticated session."""
    return MyAquinas("12345678", "delu", config)


@pytest.fixture
def authenticated_session(config: AppConfig, token: UUID) -> MyAquinas:
    return MyAquinas("12345678", "delu", config, existing_token=token)
