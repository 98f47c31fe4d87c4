"""Runtime dependency check, run before anything imports a third-party library."""

import importlib.util

from .errors import DependencyError


# import name -> distribution name
REQUIRED_MODULES = {
    "requests": "requests",
    "yaml": "PyYAML",
}


def find_missing_dependencies() -> list[str]:
    return [
        package for module, package in REQUIRED_MODULES.items()
        if importlib.util.find_spec(module) is None
    ]


def check_dependencies() -> None:
    """
    Raises:
        DependencyError: Naming the first missing distribution
    """
    missing = find_missing_dependencies()
    if missing:
        raise DependencyError(f"{missing[0]} is needed to work")
