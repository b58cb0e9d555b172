"""BuildInvoker: run Bazel builds scoped to the current package, everything, or named targets."""

import os
from dataclasses import dataclass, field
from typing import List, Sequence

import click

from my_toolkit.errors import fail
from my_toolkit.kinds import find_build_descriptor

ALL_FLAGS = ("-all", "--all")


@dataclass(frozen=True)
class BuildRequest:
    """One of three mutually exclusive build modes, selected by argument shape."""

    mode: str
    names: List[str] = field(default_factory=list)

    CURRENT = "current"
    ALL = "all"
    NAMED = "named"

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "BuildRequest":
        """Select the build mode.

        Raises:
            click.UsageError: If -all is mixed with names or an unknown flag is given
        """
        args = list(args)
        if not args:
            return cls(cls.CURRENT)
        if any(arg in ALL_FLAGS for arg in args):
            if len(args) > 1:
                raise click.UsageError("-all cannot be combined with target names")
            return cls(cls.ALL)
        unknown = [arg for arg in args if arg.startswith("-")]
        if unknown:
            raise click.UsageError(f"Unknown option: {unknown[0]}")
        return cls(cls.NAMED, [arg.strip("/") for arg in args])


class BuildInvoker:
    """Drives ``bazel`` for ``workspace build``.

    Args:
        runner: ToolRunner used for every bazel invocation.
        cwd: Directory the build was requested from.
    """

    def __init__(self, runner, cwd):
        self._runner = runner
        self._cwd = cwd

    def build(self, request: BuildRequest) -> None:
        if request.mode == BuildRequest.CURRENT:
            self.build_current_package()
        elif request.mode == BuildRequest.ALL:
            self.build_all()
        else:
            self.build_named(request.names)

    def build_current_package(self):
        if find_build_descriptor(self._cwd) is None:
            fail(f"No BUILD or BUILD.bazel file in {os.path.abspath(self._cwd)}")
        root = self.workspace_root()
        rel = os.path.relpath(os.path.realpath(self._cwd), os.path.realpath(root))
        if rel.startswith(os.pardir):
            fail(f"{os.path.abspath(self._cwd)} is outside the workspace at {root}")
        package = "" if rel == os.curdir else rel.replace(os.sep, "/")
        self._bazel_build([f"//{package}:all"])

    def build_all(self):
        self.workspace_root()
        self._bazel_build(["//..."])

    def build_named(self, names: List[str]):
        self.workspace_root()
        patterns = [f"//{name}/..." for name in names]
        for name, pattern in zip(names, patterns):
            result = self._runner.run(
                ["bazel", "query", pattern], cwd=self._cwd, capture_output=True,
            )
            if result.returncode != 0 or not (result.stdout or "").strip():
                fail(f"No Bazel targets found for '{name}'")
        for pattern in patterns:
            self._bazel_build([pattern])

    def workspace_root(self) -> str:
        """Ask bazel for the enclosing workspace root.

        Raises:
            SystemExit: If the current directory is not inside a Bazel workspace
        """
        result = self._runner.run(
            ["bazel", "info", "workspace"], cwd=self._cwd, capture_output=True,
        )
        root = (result.stdout or "").strip()
        if result.returncode != 0 or not root:
            fail(f"{os.path.abspath(self._cwd)} is not inside a Bazel workspace")
        return root

    def _bazel_build(self, targets):
        cmd = ["bazel", "build"] + targets
        click.echo(f"Building {' '.join(targets)}")
        result = self._runner.run(cmd, cwd=self._cwd)
        if result.returncode != 0:
            fail(f"{' '.join(cmd)} exited with code {result.returncode}")
