"""Click commands for the skeleton workflow."""

import os

import click

from my_toolkit.git_client import GitClient
from my_toolkit.kinds import kind_named, kind_names
from my_toolkit.skeleton.skeleton_generator import SkeletonGenerator
from my_toolkit.tool_runner import ToolRunner
from my_toolkit.toolkit_group import ToolkitGroup, is_verbose


@click.group("skeleton", cls=ToolkitGroup)
def skeleton():
    """Generate starter projects wired into the Bazel workspace."""


@skeleton.command(
    "create",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("kind", type=click.Choice(kind_names()))
@click.argument("name")
@click.argument("variant", required=False, type=click.UNPROCESSED)
@click.pass_context
def create_cmd(ctx, kind, name, variant):
    """Create a KIND project called NAME.

    \b
    Kinds and their optional extra flag:
      gradle        --wrapper   run `gradle wrapper` after scaffolding
      cdk           --install   run `npm install` after scaffolding
      react-native  --expo      use create-expo-app instead of the React Native CLI
    """
    generator = SkeletonGenerator(ToolRunner(verbose=is_verbose(ctx)), GitClient(), os.getcwd())
    generator.create(kind_named(kind), name, variant)
