import logging
import os

from pulumi import export, get_stack, log

from cds_constructs.lib.utils import exports_to_dict
from cds_constructs.module_manager import module_manager

DEBUG_ENV_VAR = "CDS_DEBUG"


def run_stack(provider: str, stack_name: str) -> None:
    """Run the module of a stack with its configuration, then export what it returned under the stack name

    :param provider: Provider of the Pulumi program
    :param stack_name: The stack name, which is also the module name
    :return: None
    """
    module = module_manager.resolve(provider, stack_name)

    log.debug(f"running module `{module.name}` for stack `{stack_name}`")

    exports = module.run(stack_name)

    export(stack_name, exports_to_dict(exports))


def run_active_stack(provider: str) -> None:
    """Run the module of the stack Pulumi is currently deploying

    This is what a Pulumi program's ``__main__.py`` calls.

    :param provider: Provider of the Pulumi program
    :return: None
    """
    stack = get_stack()

    log.debug(f"active stack is `{stack}`")

    run_stack(provider, stack)


def _enable_debug_logging() -> None:
    logging.basicConfig(level=logging.DEBUG)
    msg = "cds debug logging enabled"
    log.debug(msg)
    logging.debug(msg)


# config discovery already ran on import, debug logs cover the rest of the program
if os.getenv(DEBUG_ENV_VAR):
    _enable_debug_logging()
