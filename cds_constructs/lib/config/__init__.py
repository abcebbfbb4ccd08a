from .cds_env import CdsConfigException, HierarchicalConfig, cds_env
from .core import (
    get_default_log_prefix,
    get_project,
    get_provider_override,
    get_stack,
    get_team,
    tag_namespace,
    tag_prefix,
)
from .mapper import StackConfigError, get_stack_config
