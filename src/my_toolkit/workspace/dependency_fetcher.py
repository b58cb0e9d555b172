"""DependencyFetcher: clone dependencies into a workspace and reference them."""

import os
from dataclasses import dataclass
from typing import List, Optional

import click
from git.exc import GitError

from my_toolkit.errors import fail, warn
from my_toolkit.kinds import BUILD_DESCRIPTOR, detect_kind, find_build_descriptor
from my_toolkit.materializer import ensure_file
from my_toolkit.workspace.manifest import bazel_name


@dataclass(frozen=True)
class DependencySpec:
    """An ``owner/repo`` identifier resolved against the workspace config."""

    owner: str
    repo: str

    @classmethod
    def parse(cls, identifier: str, default_owner: Optional[str] = None) -> "DependencySpec":
        """Parse ``owner/repo`` (or bare ``repo`` when default_owner is known).

        Raises:
            click.UsageError: If the identifier cannot be resolved
        """
        identifier = identifier.strip().rstrip("/")
        if identifier.endswith(".git"):
            identifier = identifier[:-len(".git")]
        if "/" in identifier:
            owner, _, repo = identifier.rpartition("/")
        else:
            owner, repo = default_owner, identifier
        if not owner or not repo:
            raise click.UsageError(
                f"Invalid dependency '{identifier}': expected owner/repo"
                + ("" if default_owner else " (no ORG in CONFIG to use as owner)")
            )
        if repo in (".", ".."):
            raise click.UsageError(f"Invalid dependency '{identifier}': '{repo}' is not a repository name")
        return cls(owner=owner, repo=repo)

    @property
    def directory_name(self) -> str:
        return self.repo

    def clone_url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/{self.owner}/{self.repo}.git"


class DependencyFetcher:
    """Fetches dependencies into a workspace one at a time, in request order.

    Args:
        workspace: The Workspace to add dependencies to.
        git_client: Object with clone(url, dest).
        base_url: Base URL clone URLs are built from.
    """

    def __init__(self, workspace, git_client, base_url):
        self._workspace = workspace
        self._git_client = git_client
        self._base_url = base_url

    def add_all(self, identifiers: List[str]) -> None:
        config = self._workspace.load_config()
        specs = [DependencySpec.parse(i, default_owner=config.org) for i in identifiers]
        for spec in specs:
            self.add(spec)

    def add(self, spec: DependencySpec) -> None:
        manifest = self._workspace.load_manifest()
        self._check_name_is_free(manifest, spec.directory_name)

        dest = self._workspace.path_to(spec.directory_name)
        if os.path.isdir(dest):
            click.echo(f"Skipping clone of {spec.owner}/{spec.repo}: {dest} already exists")
        else:
            self._clone(spec, dest)

        reference = manifest.add_local_repository(spec.directory_name, spec.directory_name)
        manifest.save()
        click.echo(f"Added local_repository '{reference.name}' -> {reference.path}")

        self._ensure_build_descriptor(spec, dest)

    @staticmethod
    def _check_name_is_free(manifest, directory_name):
        # Same path again is a plain duplicate; same name for another path is a clash.
        name = bazel_name(directory_name)
        for reference in manifest.local_repositories:
            if reference.name == name and reference.path != directory_name:
                fail(
                    f"Cannot add {directory_name}: local_repository '{name}' "
                    f"already points to {reference.path}"
                )

    def _clone(self, spec, dest):
        url = spec.clone_url(self._base_url)
        click.echo(f"Cloning {url} into {dest}")
        try:
            self._git_client.clone(url, dest)
        except GitError as e:
            detail = str(getattr(e, "stderr", "") or "").strip()
            fail(f"git clone {url} failed: {detail or e}")

    def _ensure_build_descriptor(self, spec, dest):
        if find_build_descriptor(dest):
            return
        kind, marker = detect_kind(dest)
        if kind is None:
            warn(
                f"No {BUILD_DESCRIPTOR} written for {spec.repo}: "
                "no Gradle/Maven build file or package.json found"
            )
            return
        ensure_file(os.path.join(dest, BUILD_DESCRIPTOR), kind.build_descriptor(spec.repo, marker))
