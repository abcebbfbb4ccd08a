from pathlib import Path
from typing import Optional

from pulumi import log

from .lazy_module import LazyModule

PACKAGE_NAME = "cds_constructs"
MODULES_DIR = "modules"


def _get_package_path(path: Optional[Path] = None) -> Path:
    path = path or Path(__file__).absolute()

    for candidate in [path, *path.parents]:
        if candidate.name == PACKAGE_NAME:
            return candidate

    raise Exception(f"module population failed: package is named something other than `{PACKAGE_NAME}`")


def _get_dirs(path: Path) -> list[str]:
    """Python package directories under ``path``, private ones (``_deprecated``, ``__pycache__``) excluded

    :param path: Path to list
    :return: Sorted directory names
    """
    return sorted(child.name for child in path.iterdir() if child.is_dir() and not child.name.startswith("_"))


def _stack_name(module_dir: str) -> str:
    """``terraform_backend`` runs in the ``terraform-backend`` stack"""
    return module_dir.replace("_", "-")


def discover_modules(package_path: Optional[Path] = None) -> dict[str, dict[str, LazyModule]]:
    """Find all modules

    Assumes that the path to a module is ``cds_constructs/modules/{provider}/{module}``. Modules are keyed by the
    name of the stack running them, their directory name in kebab case.

    Example::

        # cds_constructs
        # └── modules
        #     └── aws
        #         ├── s3
        #         └── terraform_backend

        {
            "aws": {
                "s3": LazyModule(provider='aws', name='s3'),
                "terraform-backend": LazyModule(provider='aws', name='terraform_backend'),
            },
        }

    :param package_path: Root of the ``cds_constructs`` package, found from this file when unset
    :return: A mapping of providers to mappings of stack names to lazy modules
    """
    package_path = package_path or _get_package_path()

    log.debug(f"identified package path for `{PACKAGE_NAME}` as `{package_path}`")

    providers_path = package_path / MODULES_DIR

    modules = {}
    for provider in _get_dirs(providers_path):
        modules[provider] = {
            _stack_name(module_dir): LazyModule(provider, module_dir)
            for module_dir in _get_dirs(providers_path / provider)
        }

    return modules
