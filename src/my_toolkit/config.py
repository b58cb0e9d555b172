"""Toolkit configuration: the workspace CONFIG file and environment settings."""

import os
from typing import Dict, Optional

CONFIG_FILE = "CONFIG"
ORG_KEY = "ORG"

ORG_ENVVAR = "MY_TOOLKIT_ORG"
GIT_BASE_URL_ENVVAR = "MY_TOOLKIT_GIT_BASE_URL"
DEFAULT_GIT_BASE_URL = "https://github.com"


class ToolkitConfig:
    """Key-value record persisted as ``KEY=value`` lines in CONFIG.

    The file is written once by ``workspace create`` and never updated.
    """

    def __init__(self, values: Dict[str, str]):
        self._values = dict(values)

    @classmethod
    def for_org(cls, org: str) -> "ToolkitConfig":
        return cls({ORG_KEY: org})

    @classmethod
    def load(cls, config_file: str) -> "ToolkitConfig":
        """Parse config_file; a missing file yields an empty config."""
        values = {}
        if os.path.isfile(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith("#") or "=" not in line:
                        continue
                    key, value = line.split("=", 1)
                    values[key.strip()] = value.strip()
        return cls(values)

    @property
    def org(self) -> Optional[str]:
        return self._values.get(ORG_KEY) or None

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def render(self) -> str:
        return "".join(f"{key}={value}\n" for key, value in self._values.items())


def git_base_url() -> str:
    return os.environ.get(GIT_BASE_URL_ENVVAR, DEFAULT_GIT_BASE_URL).rstrip("/")
