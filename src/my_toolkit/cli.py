"""Top-level Click group for the my-toolkit CLI."""

import click

from my_toolkit.skeleton.cli import skeleton
from my_toolkit.toolkit_group import ToolkitGroup
from my_toolkit.workspace.cli import workspace


@click.group(cls=ToolkitGroup)
@click.option("--verbose", is_flag=True, help="Echo external commands before running them.")
@click.pass_context
def main(ctx, verbose):
    """my-toolkit - scaffold Bazel workspaces and starter projects."""
    ctx.ensure_object(dict)["verbose"] = verbose


main.add_command(workspace)
main.add_command(skeleton)
