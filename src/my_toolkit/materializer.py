"""Idempotent file materialization and literal placeholder substitution.

Every generated artifact goes through ensure_file(): write when missing,
otherwise report and skip. Nothing is ever overwritten.
"""

import os
import tempfile

import click

from my_toolkit.errors import fail

PROJECT_NAME_PLACEHOLDER = "__PROJECT_NAME__"


def ensure_file(path: str, content: str) -> bool:
    """Write content to path unless path already exists.

    Returns:
        True if the file was created, False if it was skipped.
    """
    if os.path.exists(path):
        click.echo(f"Skipping {path}: already exists")
        return False
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    click.echo(f"Created {path}")
    return True


def ensure_directory(path: str) -> bool:
    if os.path.isdir(path):
        click.echo(f"Skipping {path}/: already exists")
        return False
    if os.path.exists(path):
        fail(f"{path} exists and is not a directory")
    os.makedirs(path)
    click.echo(f"Created {path}/")
    return True


def substitute_placeholder(path: str, placeholder: str, value: str) -> int:
    """Replace every occurrence of placeholder in the file at path, in place.

    This is a plain global text replace with no escaping. A value or placeholder
    that collides with other text in the file gets replaced too.

    Returns:
        Number of occurrences replaced.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    count = content.count(placeholder)
    if count:
        atomic_write(path, content.replace(placeholder, value))
    return count


def atomic_write(file_path: str, content: str) -> None:
    """Write content to file atomically using temp file + rename."""
    dir_name = os.path.dirname(os.path.abspath(file_path))
    fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
        os.replace(tmp_path, file_path)
    except Exception:
        os.unlink(tmp_path)
        raise
