from __future__ import annotations

import abc
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from pathlib import Path
    from typing import TextIO

    from requests.models import PreparedRequest, Response


@dataclass
class DevTracingMixin(abc.ABC):
    _trace_filename: str = field(init=False, repr=False, default_factory=lambda: "dev_tracing/" + datetime.now().strftime("%Y%m%d.%H%M%S.") + "%counter%.txt")
    _trace_counter: int = field(init=False, repr=False, default=0)

    @property
    def dev_tracing(self) -> bool:
        """Option to enable/disable dev tracing."""
        return False

    @property
    @abc.abstractmethod
    def cache_path(self) -> Path:
        """Where to store the traces."""

    def _redact(self, text: str) -> str:
        """Remove secrets from anything written to a trace."""
        return text

    def _make_traced_request(self, request_method: Callable, method: str, url: str, **kwargs) -> Response:
        """Make request with optional dev tracing."""
        try:
            response = request_method(method, url, **kwargs)
        except BaseException as e:
            self._save_trace(method, url, kwargs, error=e)
            raise
        else:
            self._save_trace(method, url, kwargs, response=response)
            return response

    def _save_trace(self, method: str, url: str, kwargs: dict, response: Response | None = None, error: BaseException | None = None) -> None:
        if not self.dev_tracing:
            return

        self._trace_counter += 1
        filepath = self.cache_path / self._trace_filename.replace("%counter%", str(self._trace_counter))
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with filepath.open("w", encoding="utf8") as f:
            self._write_header(f)
            self._write_call_context(f)
            self._write_auth_state(f)
            self._write_request(f, method, url, kwargs)

            if response is not None:
                self._write_response_details(f, response, "RESPONSE")

            if error is not None:
                self._write_error(f, error)

            self._write_footer(f)

    def _write_section(self, f: TextIO, title: str) -> None:
        f.write("\n" + "=" * 60 + "\n")
        f.write(f"{title}\n")
        f.write("=" * 60 + "\n")

    def _write_header(self, f: TextIO) -> None:
        f.write("=" * 60 + "\n")
        f.write(f"TRACE #{self._trace_counter} - {datetime.now()}\n")
        f.write("=" * 60 + "\n")

    def _write_call_context(self, f: TextIO) -> None:
        f.write("CALL CONTEXT\n")
        f.write("-" * 40 + "\n")
        stack = traceback.extract_stack()[:-1]  # Exclude current frame
        for frame in stack[-3:]:
            f.write(f"  {frame.filename}:{frame.lineno} in {frame.name}\n")

    def _write_auth_state(self, f: TextIO) -> None:
        authenticated = getattr(self, "authenticated", False)
        f.write(f"\nAuthenticated: {authenticated}\n")
        f.write(f"Admission number: {getattr(self, 'admission_number', 'N/A')}\n")

    def _write_request(self, f: TextIO, method: str, url: str, kwargs: dict) -> None:
        self._write_section(f, "REQUEST")
        f.write(f"Method: {method}\n")
        f.write(f"URL: {url}\n")

        f.write("kwargs:\n")
        for key, value in kwargs.items():
            f.write(f"  {key}: {self._redact(str(value))}\n")

    def _write_error(self, f: TextIO, error: BaseException) -> None:
        self._write_section(f, "ERROR")
        f.write(f"Exception Type: {type(error).__name__}\n")
        f.write(f"Exception Message: '{error!s}'\n")

        f.write("Full Traceback:\n")
        f.write("-" * 40 + "\n")
        f.write(traceback.format_exc())
        f.write("-" * 40 + "\n")

        if getattr(error, "response", None) is not None:
            self._write_response_details(f, error.response, "ERROR RESPONSE")

    def _write_footer(self, f: TextIO) -> None:
        self._write_section(f, "END TRACE")

    def _write_response_details(self, f: TextIO, response: Response, title: str) -> None:
        self._write_section(f, title)

        f.write(f"Status Code: {response.status_code} {response.reason}\n")
        f.write(f"Final URL: {response.url}\n")

        req: PreparedRequest | None = getattr(response, "request", None)
        if req:
            f.write("\nActual Request Details:\n")
            f.write(f"  Method: {req.method}\n")
            f.write(f"  URL: {req.url}\n")

            if req.headers:
                f.write("  Headers:\n")
                for key, value in req.headers.items():
                    f.write(f"    {key}: {self._redact(str(value))}\n")

            if req.body:
                body_size = len(req.body) if isinstance(req.body, (str, bytes)) else 0
                f.write(f"  Body ({body_size} bytes): {self._redact(str(req.body))}\n")

        f.write("\nResponse Headers:\n")
        for key, value in response.headers.items():
            f.write(f"  {key}: {value}\n")

        f.write(f"\nContent Size: {len(response.content)} bytes\n")
        f.write(f"Content Type: {response.headers.get('content-type', 'unknown')}\n")

        f.write("Content:\n")
        f.write("-" * 40 + "\n")
        f.write(response.text)
        f.write("\n" + "-" * 40 + "\n")
