from __future__ import annotations

import asyncio
from dataclasses import InitVar, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import UUID
from xml.sax.saxutils import escape

import requests
import yaml
from logprise import logger

from ._dev_tracing import DevTracingMixin
from .common import build_auth_details, parse_token, parse_xml
from .exceptions import (
    MyAquinasBadCredentialsError,
    MyAquinasBadHttpStatusError,
    MyAquinasIllegalStateError,
    MyAquinasTransportError,
)

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from requests import Response

    from .config import Config

__all__ = ["MyAquinas", "SessionMixin"]

# The server signals an invalid admission number/password pair this way.
BAD_LOGIN_STATUS = 500


@dataclass
class MyAquinas(DevTracingMixin):
    """
    Holds the credentials of one student and, once authenticated, the token the server issued for them.

    Example:
    -------
    >>> session = MyAquinas("12345678", "secret", EnvConfig())
    >>> await session.authenticate()
    >>> session.token
    UUID('0f8fad5b-d9cb-469f-a165-70867728950e')

    """

    admission_number: str
    password: InitVar[str]
    config: Config
    existing_token: InitVar[UUID | str | None] = None

    dev_tracing: bool = False

    _password: str = field(init=False, repr=False, default="")
    _token: UUID | None = field(init=False, repr=False, default=None)
    _authenticating: bool = field(init=False, repr=False, default=False)

    def __post_init__(self, password: str, existing_token: UUID | str | None):
        self.config.validate()
        self._password = password

        if existing_token is not None:
            self._token = existing_token if isinstance(existing_token, UUID) else UUID(existing_token)

    @property
    def authenticated(self) -> bool:
        """Whether the server issued a token for this session."""
        return self._token is not None

    @property
    def token(self) -> UUID:
        if self._token is None:
            raise MyAquinasIllegalStateError("Not yet authenticated")
        return self._token

    @classmethod
    def restore(cls, admission_number: str, password: str, config: Config, **kwargs) -> MyAquinas:
        """Pick up the token saved by `save_token()`, if there is one."""
        session = cls(admission_number, password, config, **kwargs)

        if not session.token_file.exists():
            return session

        try:
            data = yaml.safe_load(session.token_file.read_text(encoding="utf8"))
        except yaml.YAMLError:
            data = None

        if not isinstance(data, dict) or not data.get("token"):
            logger.warning(f"Ignoring the unreadable token file {session.token_file}")
            session.forget_token()
            return session

        if data.get("admission_number") != admission_number:
            return session

        try:
            token = UUID(str(data["token"]))
        except ValueError:
            logger.warning(f"Ignoring the invalid token saved in {session.token_file}")
            session.forget_token()
            return session

        logger.debug(f"Restoring the session of {admission_number}")
        session._token = token
        return session

    @property
    def cache_path(self) -> Path:
        p = Path.home() / ".cache/myaquinas" / self.admission_number
        p.mkdir(parents=True, exist_ok=True)
        return p

    @property
    def token_file(self) -> Path:
        return self.cache_path / "token.yml"

    def save_token(self) -> None:
        data = {"admission_number": self.admission_number, "token": str(self.token)}
        with self.token_file.open(mode="w", encoding="utf8") as fp:
            yaml.dump(data, fp)

    def forget_token(self) -> None:
        self.token_file.unlink(missing_ok=True)

    def create_api_url(self, endpoint_path: str) -> str:
        return self.config.api_template_url.format(endpoint_path, self.admission_number)

    async def authenticate(self) -> MyAquinas:
        """
        Exchange the admission number and password for a token.

        Returns this same session, now authenticated.
        """
        if self.authenticated:
            raise MyAquinasIllegalStateError("Already authenticated")
        if self._authenticating:
            raise MyAquinasIllegalStateError("Authentication is already in progress")

        logger.info(f"Authenticating {self.admission_number}")
        self._authenticating = True
        try:
            response = await asyncio.to_thread(self._post_auth_details)
            token = parse_token(parse_xml(response), self.config.xml_namespace)
        finally:
            self._authenticating = False

        self._token = token
        logger.info(f"Authenticated {self.admission_number}")
        return self

    def _post_auth_details(self) -> Response:
        headers = {
            "Content-Type": "application/xml",
            "Accept": "application/xml",  # Otherwise the server answers with JSON
            "User-Agent": self.config.user_agent,
        }
        response = self.send("POST", self.config.auth_url, data=build_auth_details(self.admission_number, self._password), headers=headers)

        if 200 <= response.status_code < 300:
            return response

        if response.status_code == BAD_LOGIN_STATUS:
            logger.warning(f"Login refused for {self.admission_number}")
            raise MyAquinasBadCredentialsError("Invalid admission number or password")

        logger.warning(f"Authentication failed with HTTP {response.status_code}")
        raise MyAquinasBadHttpStatusError(f"Bad HTTP status: {response.status_code} {response.reason}", response.status_code, response.reason or "")

    def send(self, method: str, url: str, **kwargs) -> Response:
        """One blocking HTTP exchange on its own connection. Transport failures are classified."""
        logger.debug(f"{method} {url}")
        try:
            response = self._make_traced_request(requests.request, method, url, **kwargs)
        except requests.RequestException as ex:
            logger.warning(f"{method} {url} failed: {ex}")
            raise MyAquinasTransportError(f"Could not reach {url}: {ex}") from ex

        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    async def fetch(self, endpoint_path: str) -> Element:
        from .api_request import ApiRequest

        return await ApiRequest(self, endpoint_path).send()

    def _redact(self, text: str) -> str:
        if self._password:
            # The body is traced as str(bytes): the password is XML-escaped there, and non-ASCII is \x-escaped
            body = build_auth_details(self.admission_number, self._password)
            masked = build_auth_details(self.admission_number, "***")
            text = text.replace(str(body), str(masked)).replace(body.decode("utf-8"), masked.decode("utf-8"))
            text = text.replace(escape(self._password), "***").replace(self._password, "***")
        if self._token is not None:
            text = text.replace(str(self._token), "***")
        return text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(for: {self.admission_number})"


@dataclass
class SessionMixin:
    session: MyAquinas
