from dataclasses import dataclass, field

from pulumi import Output


@dataclass
class TerraformBackendArgs:
    bucket: str = "terraform-state"
    """Name of the state bucket. Access logs go to ``{bucket}-logs``."""

    tags: dict[str, str] = field(default_factory=dict)
    """Extra tags for the key and the buckets"""

    deletion_window_in_days: int = 7
    """Days before the state key is deleted once scheduled for deletion"""


@dataclass
class TerraformBackendExports:
    bucket: Output[str]
    """State bucket name"""

    bucket_arn: Output[str]
    """State bucket ARN"""

    log_bucket: Output[str]
    """Access log bucket name"""

    kms_key_arn: Output[str]
    """ARN of the key encrypting the state"""

    kms_alias: Output[str]
    """Alias of the key encrypting the state"""
