"""Jinja2 rendering of test specifications into pytest modules.

Templates are looked up by name as ``<name>.py.j2``, first in the
configured user directory and then among the built-in templates shipped
with the package. Every rendered module is checked with :func:`ast.parse`
before it is returned.
"""

import ast
import logging
import re
from dataclasses import dataclass, field

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError as JinjaError,
    TemplateNotFound,
)

from ..config import TemplatesConfig
from ..constants import BUILTIN_MARKERS, MARKER_PREFIX, TEMPLATE_SUFFIX
from ..errors import TemplateError
from ..models import TestSpecification

logger = logging.getLogger(__name__)


def python_identifier(text: str) -> str:
    """Lower-case snake identifier from free text."""
    name = re.sub(r"[^0-9a-zA-Z]+", "_", text).strip("_").lower()
    if not name:
        return "unnamed"
    return f"_{name}" if name[0].isdigit() else name


def class_identifier(text: str) -> str:
    """``TestCamelCase`` class name from free text."""
    words = re.findall(r"[0-9a-zA-Z]+", text)
    return "Test" + "".join(word[:1].upper() + word[1:] for word in words)


def marker_names(labels: list[str]) -> list[str]:
    """pytest marker names for labels, de-duplicated after conversion."""
    names = []
    for label in labels:
        name = python_identifier(label)
        if name in BUILTIN_MARKERS or name.startswith("_"):
            name = MARKER_PREFIX + name.lstrip("_")
        names.append(name)
    return list(dict.fromkeys(names))


@dataclass
class RenderCase:
    """A specification with the names it gets in the rendered module."""

    spec: TestSpecification
    function: str
    title: str
    markers: list[str] = field(default_factory=list)


@dataclass
class RenderClass:
    name: str
    describe: str
    cases: list[RenderCase] = field(default_factory=list)


def _unique(name: str, used: set[str]) -> str:
    candidate, n = name, 2
    while candidate in used:
        candidate = f"{name}_{n}"
        n += 1
    used.add(candidate)
    return candidate


def build_cases(specs: list[TestSpecification]) -> list[RenderCase]:
    """Assign unique ``test_*`` function names, in specification order."""
    used: set[str] = set()
    cases = []
    for spec in specs:
        function = _unique(f"test_{python_identifier(spec.test_name)}", used)
        title = " / ".join(part for part in (spec.describe, spec.context, spec.test_name) if part)
        cases.append(
            RenderCase(
                spec=spec, function=function, title=title, markers=marker_names(spec.labels)
            )
        )
    return cases


def build_classes(cases: list[RenderCase]) -> list[RenderClass]:
    """Group cases by describe label, in first-occurrence order."""
    classes: dict[str, RenderClass] = {}
    used: set[str] = set()
    for case in cases:
        describe = case.spec.describe
        if describe not in classes:
            classes[describe] = RenderClass(
                name=_unique(class_identifier(describe), used), describe=describe
            )
        classes[describe].cases.append(case)
    return list(classes.values())


class TemplateRenderer:
    """Renders groups of test specifications with Jinja2 templates."""

    def __init__(self, config: TemplatesConfig) -> None:
        self.default = config.default
        self.allow_override = config.allow_override

        loaders = []
        if config.directory:
            loaders.append(FileSystemLoader(config.directory))
        loaders.append(PackageLoader("docsyncer", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["identifier"] = python_identifier
        self.env.filters["pyrepr"] = repr

    def list_templates(self) -> list[str]:
        """Names of every available template."""
        names = self.env.list_templates(filter_func=lambda n: n.endswith(TEMPLATE_SUFFIX))
        return sorted({name[: -len(TEMPLATE_SUFFIX)] for name in names})

    def template_for(self, specs: list[TestSpecification]) -> str:
        """The first override among ``specs`` when overrides are allowed, else the default."""
        if self.allow_override:
            for spec in specs:
                if spec.template:
                    return spec.template
        return self.default

    def render(self, specs: list[TestSpecification], template: str | None = None) -> str:
        """Render one output module.

        Args:
            specs: Specifications sharing an output file
            template: Template name; chosen with :meth:`template_for` when omitted

        Returns:
            Python source of the module

        Raises:
            TemplateError: If the template is missing, fails, or yields invalid Python
        """
        name = template or self.template_for(specs)
        source_file = specs[0].source_file if specs else ""

        try:
            tmpl = self.env.get_template(f"{name}{TEMPLATE_SUFFIX}")
        except TemplateNotFound:
            available = ", ".join(self.list_templates())
            raise TemplateError(
                f"template {name!r} not found (available: {available})", file=source_file
            ) from None

        cases = build_cases(specs)
        sources = list(dict.fromkeys(spec.source_file for spec in specs))
        try:
            rendered = tmpl.render(cases=cases, classes=build_classes(cases), sources=sources)
        except JinjaError as e:
            raise TemplateError(
                f"failed to render template {name!r}", file=source_file, cause=e
            ) from e

        try:
            ast.parse(rendered)
        except SyntaxError as e:
            raise TemplateError(
                f"template {name!r} produced invalid Python",
                file=source_file,
                line=e.lineno or 0,
                cause=e,
            ) from e

        logger.debug(f"Rendered {len(specs)} test(s) with template {name!r}")
        return rendered
