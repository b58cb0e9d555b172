"""Load and render the Jinja2 templates bundled with my_toolkit."""

import importlib.resources

import jinja2

TEMPLATES_PACKAGE = "my_toolkit.templates"


def render_template(template_name: str, **kwargs) -> str:
    """Load a Jinja2 template by name and render it with the given arguments.

    Args:
        template_name: Template filename (e.g. "WORKSPACE.j2")
        **kwargs: Template variables.

    Returns:
        The rendered template string.
    """
    source = read_resource(template_name)
    return jinja2.Template(source, keep_trailing_newline=True).render(**kwargs)


def read_resource(relative_path: str) -> str:
    """Return the raw text of a file bundled under my_toolkit/templates."""
    resource = importlib.resources.files(TEMPLATES_PACKAGE).joinpath(relative_path)
    if not resource.is_file():
        raise FileNotFoundError(f"Template not found: {relative_path}")
    return resource.read_text(encoding="utf-8")
