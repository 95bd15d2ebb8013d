"""I/O collaborators for docsyncer.

- scanner: documentation file discovery
- renderer: Jinja2 rendering of test specifications
"""

from .renderer import TemplateRenderer, build_cases, build_classes, python_identifier
from .scanner import match_glob, scan_directory

__all__ = [
    "TemplateRenderer",
    "build_cases",
    "build_classes",
    "match_glob",
    "python_identifier",
    "scan_directory",
]
