from .api_request import GET_STUDENT_DETAILS, GET_TIMETABLE_DATA, ApiRequest
from .config import DEFAULT_USER_AGENT, AppConfig, Config, EnvConfig, PathConfig
from .exceptions import (
    ErrorKind,
    MyAquinasBadCredentialsError,
    MyAquinasBadHttpStatusError,
    MyAquinasException,
    MyAquinasIllegalStateError,
    MyAquinasProtocolError,
    MyAquinasTransportError,
    MyAquinasUnauthorizedError,
)
from .session import MyAquinas

__all__ = [
    "DEFAULT_USER_AGENT",
    "GET_STUDENT_DETAILS",
    "GET_TIMETABLE_DATA",
    "ApiRequest",
    "AppConfig",
    "Config",
    "EnvConfig",
    "ErrorKind",
    "MyAquinas",
    "MyAquinasBadCredentialsError",
    "MyAquinasBadHttpStatusError",
    "MyAquinasException",
    "MyAquinasIllegalStateError",
    "MyAquinasProtocolError",
    "MyAquinasTransportError",
    "MyAquinasUnauthorizedError",
    "PathConfig",
]
