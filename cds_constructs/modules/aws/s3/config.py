from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pulumi import Output

from cds_constructs.lib.iam import SSEAlgorithm


class S3BucketKind(str, Enum):
    PRIVATE = "private"
    PUBLIC = "public"
    WEBSITE = "website"


@dataclass
class S3PrivateBucketConfig:
    name: str
    """Bucket name"""

    sse_algorithm: SSEAlgorithm = SSEAlgorithm.AES
    """Server-side encryption algorithm (``AES256``, ``aws:kms``)"""

    kms_master_key_id: Optional[str] = None
    """KMS key id or ARN, for ``aws:kms`` encryption"""

    bucket_key_enabled: Optional[bool] = None
    """Use a S3 bucket key, defaults to true with KMS"""

    log_prefix: Optional[str] = None
    """Key prefix of the access logs"""

    versioned: bool = True
    """Whether this bucket should be versioned or not"""

    lifecycle_rules: Optional[list[dict]] = None
    """Lifecycle rules replacing the defaults"""

    prevent_destroy: bool = False
    """Protect the bucket from deletion"""


@dataclass
class S3PublicBucketConfig:
    name: str
    """Bucket name"""

    versioned: bool = False
    """Whether this bucket should be versioned or not"""

    cors: Optional[list[dict]] = None
    """CORS rules"""

    force_tls: bool = True
    """Deny requests not using TLS 1.2 or higher"""


@dataclass
class S3WebsiteBucketConfig:
    name: str
    """Bucket name"""

    versioned: bool = False
    """Whether this bucket should be versioned or not"""

    cors: Optional[list[dict]] = None
    """CORS rules"""

    index: str = "index.html"
    """Index document suffix"""

    error_index: str = "index.html"
    """Error document key"""

    rules: Optional[list[dict]] = None
    """Website routing rules"""


@dataclass
class S3Args:
    private: list[S3PrivateBucketConfig] = field(default_factory=list)
    """Private, encrypted and logged buckets"""

    public: list[S3PublicBucketConfig] = field(default_factory=list)
    """Public read-only buckets"""

    website: list[S3WebsiteBucketConfig] = field(default_factory=list)
    """Static website buckets"""


@dataclass
class S3Exports:
    bucket: Output[str]
    """Bucket name"""

    friendly_name: str
    """Bucket name from the configuration"""

    arn: Output[str]
    """Bucket ARN"""

    bucket_domain_name: Output[str]
    """Bucket domain name"""

    kind: S3BucketKind
    """Which construct created this bucket"""
