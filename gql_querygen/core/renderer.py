"""Renders class descriptors into a Python module.

Templates are looked up in a user directory first, then in the package:

    renderer = ModuleRenderer(template_dir="./my_templates")

Available templates to override:
    - module.py.j2: module docstring and imports around the classes
    - enum.py.j2: ``EnumClass``
    - input.py.j2: ``InputClass`` (pydantic model)
    - leaf.py.j2: ``LeafClass``
    - root.py.j2: ``RootClass`` with its ``execute`` method
"""

import ast
import logging
from pathlib import Path
from typing import Iterable

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .classes import DefinedClass
from .errors import RenderError
from .hooks import HookRunner
from .naming import indent

logger = logging.getLogger(__name__)


class ModuleRenderer:
    """Turns dependency-ordered descriptors into module source."""

    def __init__(self, template_dir: str | None = None, hooks: HookRunner | None = None):
        """Initialize the renderer.

        Args:
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            hooks: Pre-render and post-generate hooks to apply
        """
        self.template_dir = template_dir
        self.hooks = hooks or HookRunner()

        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_querygen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["repr"] = repr
        self.env.filters["indent_block"] = indent

    def render_class(self, defined_class: DefinedClass) -> str:
        template = self.env.get_template(f"{defined_class.kind}.py.j2")
        return template.render(cls=defined_class).rstrip()

    def render(
        self,
        classes: Iterable[DefinedClass],
        imports: Iterable[str] = (),
        filename: str = "generated.py",
    ) -> str:
        """Render a complete module and check that it parses."""
        classes = self.hooks.run_pre_hooks(list(classes))
        body = "\n\n\n".join(self.render_class(defined_class) for defined_class in classes)
        template = self.env.get_template("module.py.j2")
        content = template.render(imports=sorted(set(imports)), body=body) + "\n"
        content = self.hooks.run_post_hooks(filename, content)

        try:
            ast.parse(content)
        except SyntaxError as e:
            raise RenderError(f"Generated invalid Python for {filename}: {e}") from e

        logger.debug("Rendered %d classes into %s", len(classes), filename)
        return content

    def write(self, path: str | Path, classes: Iterable[DefinedClass], imports: Iterable[str] = ()) -> str:
        """Render a module and write it to ``path``."""
        path = Path(path)
        content = self.render(classes, imports, filename=path.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return content
