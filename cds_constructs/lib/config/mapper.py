import json
from enum import Enum
from typing import Any, Iterator, Type

from dacite import Config, DaciteError, from_dict
from pulumi import log, runtime

from cds_constructs.lib.base import ConfigType

DACITE_CONFIG = Config(cast=[Enum], strict=True)
"""Unknown keys are rejected, enum fields (``SSEAlgorithm``,...) are built from their value"""


class StackConfigError(ValueError):
    def __init__(self, stack: str, error: Exception):
        super().__init__(f"invalid configuration for stack `{stack}`: {error}")
        self.stack = stack


def _parse_args_value(value: Any) -> Any:
    """Decode JSON values, Pulumi stores structured config (lists, objects) as JSON strings

    :param value: A potential json string
    :return: Parsed json object or raw arg
    """
    try:
        return json.loads(value)
    except (TypeError, json.decoder.JSONDecodeError):
        return value


def _stack_items(stack: str) -> Iterator[tuple[str, str]]:
    stack_prefix = f"{stack}:"

    for key, value in runtime.config.CONFIG.items():
        if key.startswith(stack_prefix):
            yield key.removeprefix(stack_prefix), value


def get_raw_stack_config(stack: str) -> dict:
    """Pull the config namespaced by the stack name from Pulumi internals, in dict form

    With a stack named ``terraform-backend``, ``terraform-backend:bucket`` becomes the ``bucket`` key. Keys of other
    namespaces (``aws:region``, ``cds:provider``) are left out.

    This method may break when upgrading the ``pulumi`` python dependency.

    :param stack: Name of the stack
    :return: dict
    """
    config = {key: _parse_args_value(value) for key, value in _stack_items(stack)}

    log.debug(f"config dict for stack `{stack}` is {config}")

    return config


def get_stack_config(stack: str, config_cls: Type[ConfigType]) -> ConfigType:
    """Get a stack config in dataclass form

    Uses `dacite <https://github.com/konradhalas/dacite>`_ to map dict to dataclass, see ``DACITE_CONFIG``.

    :param stack: Name of the stack
    :param config_cls: The dataclass for the config
    :return: The stack config expressed in the module's config dataclass
    :raises StackConfigError: when the configuration doesn't fit ``config_cls``
    """
    try:
        config = from_dict(data_class=config_cls, data=get_raw_stack_config(stack), config=DACITE_CONFIG)
    except (DaciteError, ValueError) as e:
        raise StackConfigError(stack, e) from e

    log.debug(f"config for stack `{stack}` is {config}")

    return config
