"""Workspace: a directory marked by a WORKSPACE file, plus its creation."""

import os

import click

from my_toolkit.config import CONFIG_FILE, ToolkitConfig
from my_toolkit.errors import fail
from my_toolkit.materializer import ensure_directory, ensure_file
from my_toolkit.templates.template_renderer import render_template
from my_toolkit.workspace.manifest import WORKSPACE_FILE, WorkspaceManifest, bazel_name
from my_toolkit.workspace.preflight import ensure_tool

ROOT_BUILD_FILE = "BUILD.bazel"


class Workspace:
    """Value object for a workspace root directory and its marker files."""

    def __init__(self, root: str):
        self._root = root

    @classmethod
    def in_directory(cls, directory: str) -> "Workspace":
        """Return the workspace rooted at directory.

        Raises:
            SystemExit: If directory has no WORKSPACE file
        """
        workspace = cls(directory)
        if not os.path.isfile(workspace.manifest_file):
            fail(
                f"No {WORKSPACE_FILE} file in {os.path.abspath(directory)}. "
                "Run 'my-toolkit workspace create <path>' first."
            )
        return workspace

    @property
    def root(self) -> str:
        return self._root

    @property
    def name(self) -> str:
        return os.path.basename(os.path.normpath(os.path.abspath(self._root)))

    @property
    def manifest_file(self) -> str:
        return os.path.join(self._root, WORKSPACE_FILE)

    @property
    def config_file(self) -> str:
        return os.path.join(self._root, CONFIG_FILE)

    def load_manifest(self) -> WorkspaceManifest:
        return WorkspaceManifest.load(self.manifest_file)

    def load_config(self) -> ToolkitConfig:
        return ToolkitConfig.load(self.config_file)

    def path_to(self, *parts) -> str:
        return os.path.join(self._root, *parts)


def create_workspace(path: str, org, runner, system=None, which=None) -> Workspace:
    """Create (or complete) a workspace at path.

    Each marker file is written only if missing, so re-running on a
    partially created workspace fills the gaps and touches nothing else.
    """
    ensure_tool("bazel", runner, system=system, which=which)

    workspace = Workspace(path)
    if not org and not os.path.isfile(workspace.config_file):
        fail(f"No organization given and no {CONFIG_FILE} in {path}; pass --org")

    ensure_directory(path)
    manifest = WorkspaceManifest.new(workspace.manifest_file, workspace.name)
    ensure_file(workspace.manifest_file, manifest.text)
    if org:
        ensure_file(workspace.config_file, ToolkitConfig.for_org(org).render())
    else:
        click.echo(f"Skipping {workspace.config_file}: already exists")
    ensure_file(
        workspace.path_to(ROOT_BUILD_FILE),
        render_template("root_BUILD.bazel.j2", workspace_name=bazel_name(workspace.name)),
    )
    ensure_file(workspace.path_to(".bazelrc"), render_template("bazelrc.j2"))
    ensure_file(workspace.path_to(".gitignore"), render_template("workspace_gitignore.j2"))

    click.echo(f"Workspace ready at {os.path.abspath(path)}")
    return workspace
