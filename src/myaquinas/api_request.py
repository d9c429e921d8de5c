from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from logprise import logger

from .common import parse_xml
from .exceptions import MyAquinasBadHttpStatusError, MyAquinasIllegalStateError, MyAquinasUnauthorizedError
from .session import SessionMixin

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from requests import Response

__all__ = ["GET_STUDENT_DETAILS", "GET_TIMETABLE_DATA", "ApiRequest"]

GET_STUDENT_DETAILS: Final[str] = "Student/GetStudentDetails"
GET_TIMETABLE_DATA: Final[str] = "Student/gettimetable"


@dataclass
class ApiRequest(SessionMixin):
    """
    A single authenticated call to the MyAquinas API.

    Every instance can be sent once; create a new one to call the endpoint again.

    Example:
    -------
    >>> root = await ApiRequest(session, GET_STUDENT_DETAILS).send()
    >>> root.tag
    '{http://schemas.datacontract.org/2004/07/MyAquinas}StudentDetails'

    """

    endpoint_path: str

    url: str = field(init=False)
    headers: dict[str, str] = field(init=False, repr=False)
    _sent: bool = field(init=False, repr=False, default=False)

    def __post_init__(self):
        if not self.session.authenticated:
            raise MyAquinasIllegalStateError("Cannot create a request from an unauthenticated session")

        self.url = self.session.create_api_url(self.endpoint_path)
        self.headers = {
            "Accept": "application/xml",
            "User-Agent": self.session.config.user_agent,
            "AuthToken": str(self.session.token),
        }

    async def send(self) -> Element:
        """Send the request and return the root of the XML document the server answered with."""
        if self._sent:
            raise MyAquinasIllegalStateError(f"The request to {self.endpoint_path} was already sent")
        self._sent = True

        response = await asyncio.to_thread(self._get)
        return parse_xml(response)

    def _get(self) -> Response:
        response = self.session.send("GET", self.url, headers=self.headers)

        if response.status_code == 200:
            return response

        if response.status_code == 401:
            logger.warning(f"Token rejected on {self.endpoint_path}")
            raise MyAquinasUnauthorizedError("The session has expired, please authenticate again")

        raise MyAquinasBadHttpStatusError(f"Bad HTTP status: {response.reason}", response.status_code, response.reason or "")
