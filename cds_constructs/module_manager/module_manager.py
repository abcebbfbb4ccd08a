from typing import Optional

from pulumi import log

from cds_constructs.lib.config import get_provider_override
from .discover_modules import discover_modules
from .lazy_module import LazyModule


class _ModuleManager:
    """
    Registry of the stack modules shipped in ``cds_constructs.modules``.

    ``modules`` maps providers to stack names to lazy modules::

        {
            "aws": {
                "s3": LazyModule(provider='aws', name='s3'),
                "terraform-backend": LazyModule(provider='aws', name='terraform_backend'),
            },
        }

    Nothing is imported until a module is run.
    """

    def __init__(self, modules: Optional[dict[str, dict[str, LazyModule]]] = None):
        self.modules = discover_modules() if modules is None else modules

        log.debug(f"discovered modules `{self.modules}`")

    def get_module(self, provider: str, module_name: str) -> LazyModule:
        """Find the module of a stack

        :param provider: Provider name
        :param module_name: Module name, which is the stack name
        :return: A LazyModule
        :raises ModuleNotFoundError: when the provider has no such module
        """
        provider_modules = self.get_provider_modules(provider)

        if module_name not in provider_modules:
            raise ModuleNotFoundError(
                f"module `{module_name}` was not found under provider `{provider}`, "
                f"known modules are {sorted(provider_modules)}"
            )

        log.debug(f"accessing module `{provider_modules[module_name]}`")

        return provider_modules[module_name]

    def get_provider_modules(self, provider: str) -> dict[str, LazyModule]:
        """
        :param provider: Provider name
        :return: The modules of a provider, by stack name
        :raises ModuleNotFoundError: for an unknown provider
        """
        try:
            return self.modules[provider]
        except KeyError:
            raise ModuleNotFoundError(f"unknown provider `{provider}`, known providers are {sorted(self.modules)}")

    def resolve(self, provider: str, stack_name: str) -> LazyModule:
        """Find the module a stack runs, honoring the ``cds:provider`` configuration

        Stacks may run a module of another provider than their program's, by setting ``cds:provider``.

        :param provider: Provider of the Pulumi program
        :param stack_name: Stack name
        :return: A LazyModule
        """
        override = get_provider_override()
        if override and override != provider:
            log.debug(f"provider `{provider}` overridden by `{override}` for stack `{stack_name}`")

        return self.get_module(override or provider, stack_name)


module_manager = _ModuleManager()
