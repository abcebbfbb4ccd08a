import logging
import sys
from collections import UserDict
from pathlib import Path
from typing import Any, Optional

import hiyapyco

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "Cds.common.yaml"


class CdsConfigException(Exception):
    def __init__(self, key):
        super().__init__(f"Missing required configuration variable '{key}'")


class HierarchicalConfig(UserDict):
    """
    HierarchicalConfig is a UserDict loading configuration from a tiered set of config files.

    Starting from the directory of the program entrypoint (the Pulumi program's ``__main__.py`` unless told
    otherwise), it walks the filesystem upwards a configurable number of times collecting ``Cds.common.yaml`` files.
    The walk stops at the git project root.

    The discovered files are merged with HiYaPyCo, which supports Jinja2 syntax. Files closer to the entrypoint
    override their parents.

    Example usage:
        from cds_constructs.lib.config import cds_env

        cds_env.get("tag_namespace", "cds")
        cds_env.require("team")

    """

    def __init__(self, limit: int = 5, filename: str = CONFIG_FILENAME, entrypoint: Optional[Path] = None):
        """
        Create a HierarchicalConfig UserDict

        :param limit: Max parent directories to walk
        :param filename: Filename to find and merge
        :param entrypoint: File to start from. Defaults to the ``__main__`` module.
        """
        super().__init__()
        self.filename = filename
        configs = list(reversed(self._discover_configs(limit, entrypoint or self._get_main_entrypoint())))
        logger.debug("Found configs in %s", configs)

        if configs:
            self.data = dict(hiyapyco.load([str(path) for path in configs], method=hiyapyco.METHOD_MERGE))

    def require(self, key: str) -> Any:
        """
        Require a key from the configuration and return it. If not found, throw a `CdsConfigException`

        :param key: Key string to require from the configuration
        :return: Object
        """
        if (v := self.get(key)) is not None:
            return v
        raise CdsConfigException(key)

    @staticmethod
    def _get_main_entrypoint() -> Path:
        main_module = sys.modules["__main__"]
        if not hasattr(main_module, "__file__"):
            raise Exception(
                "Can't find __file__ for __main__. HINT: Don't use HierarchicalConfig from a REPL if you are."
            )

        return Path(main_module.__file__)

    def _discover_configs(self, limit: int, entrypoint: Path) -> list[Path]:
        """
        Walk upwards from the entrypoint and collect config files, closest first

        :param limit: Max parent directories to walk
        :param entrypoint: File the walk starts from
        :return: list of config paths
        """
        config_paths = []

        entrypoint = entrypoint.absolute()
        logger.debug("Entrypoint: %s", entrypoint)

        for path in list(entrypoint.parents)[:limit]:
            logger.debug("Looking in [%s] for [%s]", path, self.filename)
            maybe_config = path / self.filename
            if maybe_config.is_file():
                logger.debug("Detected config [%s]", maybe_config)
                config_paths.append(maybe_config)

            # a config may live at the project root, but not above it
            if (path / ".git").is_dir():
                logger.debug("Found project root, breaking")
                break

        return config_paths


# Singleton, to avoid loading and merging configuration multiple times on import
cds_env = HierarchicalConfig()
