from typing import Any, TypeVar

ConfigType = TypeVar("ConfigType")
"""A module config dataclass, mapped from the stack configuration"""

ExportsType = Any
"""A module exports dataclass (or a list of them)"""
