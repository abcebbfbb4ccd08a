from abc import ABC, abstractmethod
from dataclasses import is_dataclass
from functools import cache
from typing import Optional, Type, get_type_hints

from pulumi import ComponentResource, ResourceOptions, log

from cds_constructs.lib.base.types import ConfigType, ExportsType
from cds_constructs.lib.utils import outputs_from_exports


class BaseModule(ComponentResource, ABC):
    """
    The base class for a stack module.

    A module is a Pulumi component built from the configuration of the stack it runs in. Subclasses implement
    ``build`` and annotate its ``config`` parameter with their config dataclass, which is what the stack
    configuration gets mapped onto.

    The component type is ``pkg:cds:{provider}:{class name}``, ``pkg:cds:aws:s3buckets`` for ``S3Buckets``.
    """

    @property
    @abstractmethod
    def provider(self) -> str:
        """Name of the provider"""

    def __init__(self, name: str, config: ConfigType, opts: Optional[ResourceOptions] = None):
        super().__init__(f"pkg:cds:{self.provider}:{type(self).__name__.lower()}", name, None, opts)

        self.module_name = name
        self.exports: Optional[ExportsType] = None
        self._config = config

    @classmethod
    @cache
    def get_config_type(cls) -> Type[ConfigType]:
        """
        :return: The dataclass annotating the ``config`` parameter of ``build``
        :raises TypeError: when the annotation is missing or isn't a dataclass
        """
        config_type = get_type_hints(cls.build).get("config")

        if config_type is None:
            raise TypeError(f"module `{cls.__name__}` `build` method does not have a type hint for the `config` param")
        if not is_dataclass(config_type):
            raise TypeError(f"module `{cls.__name__}` config type `{config_type}` is not a dataclass")

        return config_type

    def run(self) -> ExportsType:
        """Build the module resources and register the exports as the component outputs

        :return: An exports object
        """
        log.debug(f"building module `{type(self).__name__}`", resource=self)

        self.exports = self.build(self._config)
        self.register_outputs(outputs_from_exports(self.exports))

        return self.exports

    @abstractmethod
    def build(self, config: ConfigType) -> ExportsType:
        """Create cloud resources

        :param config: The module configuration
        :return: An exports object
        """
