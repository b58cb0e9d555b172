"""Preflight: make sure a required build tool is on PATH, installing it once if not."""

import platform
import shutil

import click

from my_toolkit.errors import fail

# Package to request from each OS package manager, per tool.
_PACKAGES = {
    "bazel": {"Linux": "bazel", "Darwin": "bazelisk"},
}


def install_command(tool: str, system: str):
    """Return the install command for tool on the OS named by system, or None."""
    package = _PACKAGES.get(tool, {}).get(system, tool)
    if system == "Linux":
        return ["sudo", "apt-get", "install", "-y", package]
    if system == "Darwin":
        return ["brew", "install", package]
    return None


def ensure_tool(tool: str, runner, system=None, which=None) -> str:
    """Ensure tool is reachable on PATH.

    Makes one installation attempt through the platform package manager when
    the tool is missing. There is no retry and no rollback.

    Returns:
        The resolved path of the tool.

    Raises:
        SystemExit: If the tool is still unavailable after the attempt
    """
    which = which or shutil.which
    found = which(tool)
    if found:
        return found

    system = system or platform.system()
    cmd = install_command(tool, system)
    if cmd is None:
        fail(f"{tool} is not installed and automatic installation is not supported on {system}")

    click.echo(f"{tool} not found on PATH, installing with: {' '.join(cmd)}")
    result = runner.run(cmd)
    found = which(tool)
    if not found:
        fail(
            f"{tool} is still not available after installation "
            f"(installer exited with code {result.returncode}). Install it manually and retry."
        )
    return found
