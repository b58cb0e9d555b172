"""SkeletonGenerator: create a starter project of a given kind with its own git history."""

import os
from dataclasses import dataclass
from typing import Optional

import click
from git.exc import GitError

from my_toolkit.errors import ErrorPolicy, fail, report
from my_toolkit.kinds import BUILD_DESCRIPTOR
from my_toolkit.materializer import PROJECT_NAME_PLACEHOLDER, ensure_file, substitute_placeholder

INITIAL_COMMIT_MESSAGE = "Initial {kind} skeleton for {name}"


@dataclass(frozen=True)
class SkeletonPolicies:
    """Error policy of each recoverable skeleton step."""

    post_scaffold: ErrorPolicy = ErrorPolicy.WARN
    git_init: ErrorPolicy = ErrorPolicy.WARN
    git_commit: ErrorPolicy = ErrorPolicy.WARN


class SkeletonGenerator:
    """Creates skeleton projects in a parent directory.

    Args:
        runner: ToolRunner for external scaffolding and post-scaffold tools.
        git_client: Object with init(directory) and commit_all(directory, message).
        parent_dir: Directory the project directory is created in.
    """

    def __init__(self, runner, git_client, parent_dir, policies=None):
        self._runner = runner
        self._git_client = git_client
        self._parent_dir = parent_dir
        self._policies = policies or SkeletonPolicies()

    def create(self, kind, name: str, variant: Optional[str] = None) -> str:
        """Generate the skeleton and return its directory.

        Raises:
            SystemExit: If the project directory already exists
        """
        kind.validate_variant(variant)
        if not name or name in (os.curdir, os.pardir) or os.sep in name:
            raise click.UsageError(f"Invalid project name: {name!r}")
        project_dir = os.path.join(self._parent_dir, name)
        if os.path.exists(project_dir):
            fail(f"{project_dir} already exists; refusing to overwrite it")

        click.echo(f"Creating {kind.name} skeleton '{name}' in {project_dir}")
        written = kind.materialize(project_dir, name, variant, self._runner)
        for path in written:
            substitute_placeholder(path, PROJECT_NAME_PLACEHOLDER, name)

        ensure_file(os.path.join(project_dir, BUILD_DESCRIPTOR), kind.build_descriptor(name))

        self._run_post_scaffold(kind, variant, project_dir)
        self._commit(kind, name, project_dir)
        click.echo(f"Skeleton ready at {project_dir}")
        return project_dir

    def _run_post_scaffold(self, kind, variant, project_dir):
        cmd = kind.post_scaffold_command(variant)
        if cmd is None:
            return
        result = self._runner.run(cmd, cwd=project_dir)
        if result.returncode != 0:
            report(
                self._policies.post_scaffold,
                f"{' '.join(cmd)} exited with code {result.returncode}",
            )

    def _commit(self, kind, name, project_dir):
        try:
            self._git_client.init(project_dir)
        except (GitError, OSError) as e:
            report(self._policies.git_init, f"git init failed in {project_dir}: {e}")
            return
        message = INITIAL_COMMIT_MESSAGE.format(kind=kind.name, name=name)
        try:
            self._git_client.commit_all(project_dir, message)
        except (GitError, OSError) as e:
            report(self._policies.git_commit, f"initial commit failed in {project_dir}: {e}")
            return
        click.echo(f"Committed {project_dir}: {message}")
