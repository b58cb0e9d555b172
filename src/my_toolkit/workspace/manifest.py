"""WorkspaceManifest: read-modify-write model of the Bazel WORKSPACE file.

The file stays free-form Bazel DSL. The manifest parses out the workspace name
and the local_repository() references, lets callers append references, and
writes the text back. Appends are never deduplicated.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from my_toolkit.materializer import atomic_write
from my_toolkit.templates.template_renderer import render_template

WORKSPACE_FILE = "WORKSPACE"

_WORKSPACE_NAME_RE = re.compile(r'^\s*workspace\(\s*name\s*=\s*"([^"]+)"', re.MULTILINE)
_LOCAL_REPOSITORY_RE = re.compile(
    r'local_repository\(\s*name\s*=\s*"([^"]+)"\s*,\s*path\s*=\s*"([^"]+)"\s*,?\s*\)',
    re.DOTALL,
)


def bazel_name(name: str) -> str:
    """Turn a directory or project name into a valid Bazel repository/target name."""
    safe = re.sub(r"[^A-Za-z0-9_]", "_", name)
    if not safe or not safe[0].isalpha():
        safe = f"_{safe}"
    return safe


@dataclass(frozen=True)
class LocalRepository:
    """A named pointer from the workspace to a dependency's source directory."""

    name: str
    path: str


class WorkspaceManifest:
    """In-memory view of a WORKSPACE file."""

    def __init__(self, manifest_file: str, text: str):
        self._manifest_file = manifest_file
        self._text = text

    @classmethod
    def new(cls, manifest_file: str, workspace_name: str) -> "WorkspaceManifest":
        text = render_template("WORKSPACE.j2", workspace_name=bazel_name(workspace_name))
        return cls(manifest_file, text)

    @classmethod
    def load(cls, manifest_file: str) -> "WorkspaceManifest":
        with open(manifest_file, "r", encoding="utf-8") as f:
            return cls(manifest_file, f.read())

    @property
    def path(self) -> str:
        return self._manifest_file

    @property
    def text(self) -> str:
        return self._text

    @property
    def name(self) -> Optional[str]:
        match = _WORKSPACE_NAME_RE.search(self._text)
        return match.group(1) if match else None

    @property
    def local_repositories(self) -> List[LocalRepository]:
        return [
            LocalRepository(name=m.group(1), path=m.group(2))
            for m in _LOCAL_REPOSITORY_RE.finditer(self._text)
        ]

    def add_local_repository(self, name: str, path: str) -> LocalRepository:
        """Append a local_repository() block, even if an identical one exists."""
        reference = LocalRepository(name=bazel_name(name), path=path)
        block = render_template("local_repository.j2", name=reference.name, path=reference.path)
        if self._text and not self._text.endswith("\n"):
            self._text += "\n"
        self._text += block
        return reference

    def save(self) -> None:
        atomic_write(self._manifest_file, self._text)
