"""Click commands for the workspace workflow."""

import os

import click

from my_toolkit.config import CONFIG_FILE, GIT_BASE_URL_ENVVAR, ORG_ENVVAR, git_base_url
from my_toolkit.git_client import GitClient
from my_toolkit.tool_runner import ToolRunner
from my_toolkit.toolkit_group import ToolkitGroup, is_verbose
from my_toolkit.workspace.build_invoker import BuildInvoker, BuildRequest
from my_toolkit.workspace.dependency_fetcher import DependencyFetcher
from my_toolkit.workspace.workspace import Workspace, create_workspace


@click.group("workspace", cls=ToolkitGroup)
def workspace():
    """Create a Bazel workspace, add dependencies, and build."""


@workspace.command("create")
@click.argument("path")
@click.option("--org", envvar=ORG_ENVVAR, help="Organization recorded in CONFIG.")
@click.pass_context
def create_cmd(ctx, path, org):
    """Create a workspace at PATH (existing files are left untouched)."""
    if not org and not os.path.isfile(os.path.join(path, CONFIG_FILE)):
        org = click.prompt("Organization name")
    create_workspace(path, org, ToolRunner(verbose=is_verbose(ctx)))


@workspace.command("add")
@click.option(
    "-p", "--project", "projects", multiple=True, required=True,
    help="Dependency as owner/repo. Repeat to add several, in order.",
)
@click.option(
    "--git-base-url", "base_url", envvar=GIT_BASE_URL_ENVVAR,
    help="Base URL clone URLs are built from (default https://github.com).",
)
def add_cmd(projects, base_url):
    """Clone dependencies into the workspace and reference them in WORKSPACE."""
    ws = Workspace.in_directory(os.getcwd())
    fetcher = DependencyFetcher(ws, GitClient(), base_url or git_base_url())
    fetcher.add_all(list(projects))


@workspace.command(
    "build",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("targets", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def build_cmd(ctx, targets):
    """Build the current package, everything (-all), or the named TARGETS."""
    request = BuildRequest.from_args(targets)
    invoker = BuildInvoker(ToolRunner(verbose=is_verbose(ctx)), os.getcwd())
    invoker.build(request)
