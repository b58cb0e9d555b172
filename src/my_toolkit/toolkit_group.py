"""Click group shared by every my-toolkit command group."""

from contextlib import contextmanager

import click

USAGE_EXIT_CODE = 1


@contextmanager
def _single_failure_exit_code():
    try:
        yield
    except click.UsageError as e:
        e.exit_code = USAGE_EXIT_CODE
        raise


class ToolkitGroup(click.Group):
    """Group whose usage errors exit with 1, like every other failure.

    A missing subcommand is reported as a usage error instead of printing help.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("no_args_is_help", False)
        super().__init__(*args, **kwargs)

    def make_context(self, info_name, args, parent=None, **extra):
        with _single_failure_exit_code():
            return super().make_context(info_name, args, parent=parent, **extra)

    def invoke(self, ctx):
        with _single_failure_exit_code():
            return super().invoke(ctx)


def is_verbose(ctx: click.Context) -> bool:
    obj = ctx.find_object(dict)
    return bool(obj and obj.get("verbose"))
