from typing import Optional

from pulumi import Config, get_project, get_stack

from .cds_env import cds_env

cds_config = Config("cds")

tag_namespace = cds_env.get("tag_namespace", "cds")
"""Prefix of the standard tags set on resources.
   This differs from the ``cds`` Pulumi config namespace, as this is used for the actual resources.
"""

tag_prefix = f"{tag_namespace}{cds_env.get('tag_separator', ':')}"


def get_team() -> Optional[str]:
    """
    Team owning the resources, tagged when set

    :return: team name or None
    """
    return cds_env.get("team")


def get_default_log_prefix() -> str:
    """
    Key prefix access logs are written under when a private bucket doesn't set one

    :return: str
    """
    return cds_env.get("log_prefix", "logs/")


def get_provider_override() -> Optional[str]:
    """
    Retrieve the provider override for the current module (`cds:provider: myprovider`)

    :return: provider name or None
    """
    return cds_config.get("provider")
