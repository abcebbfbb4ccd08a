import inspect
from dataclasses import dataclass
from functools import cached_property
from importlib import import_module
from typing import Optional, Type

from pulumi import ResourceOptions, log

from cds_constructs.lib.base import BaseModule, ExportsType
from cds_constructs.lib.config import get_stack_config


@dataclass
class LazyModule:
    """
    A stack module found on disk, ``cds_constructs/modules/{provider}/{name}``.

    Importing it is deferred until its ``Module`` class is needed, so a program only imports the module its stack
    runs.
    """

    provider: str
    """Name of the provider"""

    name: str
    """Name of the python package, in snake case"""

    @property
    def path(self) -> str:
        """Import path, relative to the ``cds_constructs`` package"""
        return f".modules.{self.provider}.{self.name}"

    @cached_property
    def Module(self) -> Type[BaseModule]:
        """
        The concrete ``BaseModule`` subclass the package exports. Abstract bases (``AWSModule``) are ignored, and
        exactly one concrete class must remain.
        """
        log.debug(f"performing first-time import for module at `cds_constructs{self.path}`")

        package = import_module(self.path, "cds_constructs")

        candidates = [
            value
            for key, value in vars(package).items()
            if not key.startswith("_")
            and inspect.isclass(value)
            and issubclass(value, BaseModule)
            and not inspect.isabstract(value)
        ]

        if not candidates:
            raise ModuleNotFoundError(f"no subclass of `{BaseModule.__name__}` found in `{self.path}`")
        if len(candidates) > 1:
            raise TypeError(f"`{self.path}` exports several modules: {[c.__name__ for c in candidates]}")

        log.debug(f"found module class `{candidates[0].__name__}`")

        return candidates[0]

    def run(self, stack_name: str, opts: Optional[ResourceOptions] = None) -> ExportsType:
        """Build the module from the stack configuration

        :param stack_name: Stack name, which namespaces the configuration keys
        :param opts: Optional set of ``pulumi.ResourceOptions`` to forward to the module component
        :return: The module exports
        """
        module_cls = self.Module
        config = get_stack_config(stack_name, module_cls.get_config_type())

        log.debug(f"running module `{module_cls.__name__}` for stack `{stack_name}`")

        return module_cls(stack_name, config, opts=opts).run()
