from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Final

import yaml

DEFAULT_USER_AGENT: Final[str] = "MyAquinasMobileAPI"

required_fields: Final[list[str]] = ["auth_url", "api_template_url"]
optional_fields: Final[dict[str, str]] = {"xml_namespace": "", "user_agent": DEFAULT_USER_AGENT}

__all__ = ["DEFAULT_USER_AGENT", "AppConfig", "Config", "EnvConfig", "PathConfig"]


class Config:
    """Where the MyAquinas server lives and how to talk to it."""

    auth_url: str = ""
    api_template_url: str = ""
    xml_namespace: str = ""
    user_agent: str = DEFAULT_USER_AGENT

    other_info: dict | None = None

    def validate(self) -> None:
        error = []
        for name in [*required_fields, *optional_fields]:
            new_value = (getattr(self, name) or "").strip()
            if not new_value and name in optional_fields:
                new_value = optional_fields[name]

            object.__setattr__(self, name, new_value)

            if not new_value and name in required_fields:
                error.append(name)

        # The template is filled as template.format(endpoint_path, admission_number)
        if self.api_template_url and not all(p in self.api_template_url for p in ("{0}", "{1}")):
            error.append("api_template_url")

        if error:
            raise RuntimeError(f"Please verify and correct these attributes: {error}")

    def as_dict(self) -> dict[str, str | dict]:
        data: dict = {name: getattr(self, name) for name in [*required_fields, *optional_fields]}

        if self.other_info:
            data["other_info"] = self.other_info

        return data


@dataclass(frozen=True)
class PathConfig(Config):
    CONFIG_FILENAME: ClassVar[str] = "myaquinas.yml"
    filename: str | Path = ""

    def __post_init__(self):
        object.__setattr__(self, "filename", self._find_config_file())

        config_file: dict = yaml.safe_load(self.filename.read_text(encoding="utf8")) or {}
        for name in required_fields:
            object.__setattr__(self, name, config_file.pop(name, ""))
        for name, default in optional_fields.items():
            object.__setattr__(self, name, config_file.pop(name, default))

        object.__setattr__(self, "other_info", config_file)

    def _find_config_file(self) -> Path:
        to_investigate = self.filename
        potential_paths = []

        if to_investigate:
            to_investigate = Path(to_investigate)
            potential_paths.append(to_investigate)
            potential_paths.extend(p / to_investigate.name for p in to_investigate.parents)
            potential_paths.extend(p / to_investigate.name for p in Path.cwd().parents)
            potential_paths.append(Path.home() / to_investigate.name)
            potential_paths.append(Path.home() / ".cache/myaquinas" / to_investigate.name)

        potential_paths.append(Path.cwd() / self.CONFIG_FILENAME)
        potential_paths.extend(p / self.CONFIG_FILENAME for p in Path.cwd().parents)
        potential_paths.append(Path.home() / self.CONFIG_FILENAME)
        potential_paths.append(Path.home() / ".cache/myaquinas" / self.CONFIG_FILENAME)

        already_seen = set()
        for p in potential_paths:
            p = p.resolve().absolute()
            if p not in already_seen and p.is_file():
                return p

            already_seen.add(p)

        raise FileNotFoundError(self.filename or self.CONFIG_FILENAME)


@dataclass(frozen=True)
class EnvConfig(Config):
    def __post_init__(self):
        for name in required_fields:
            object.__setattr__(self, name, os.getenv(f"MYAQUINAS_{name.upper()}", ""))
        for name, default in optional_fields.items():
            object.__setattr__(self, name, os.getenv(f"MYAQUINAS_{name.upper()}", default))


@dataclass(frozen=True)
class AppConfig(Config):
    auth_url: str
    api_template_url: str
    xml_namespace: str = ""
    user_agent: str = DEFAULT_USER_AGENT
