from dataclasses import dataclass, field
from typing import Optional

from pulumi import Input

from cds_constructs.lib.iam import SSEAlgorithm

DEFAULT_CORS_RULE = {
    "allowed_headers": ["*"],
    "allowed_methods": ["GET", "HEAD"],
    "allowed_origins": ["*"],
    "expose_headers": [],
}


@dataclass
class S3LogBucketArgs:
    log_prefix: str
    """Key prefix the logging service writes under (``logs/``), a leading slash is ignored"""

    bucket: Optional[str] = None
    """Bucket name, generated by Pulumi when unset"""

    tags: dict[str, str] = field(default_factory=dict)
    """Tags for the bucket"""

    sse_algorithm: SSEAlgorithm = SSEAlgorithm.AES
    """Server-side encryption algorithm"""

    kms_master_key_id: Optional[Input[str]] = None
    """KMS key used when ``sse_algorithm`` is ``aws:kms``, defaults to the AWS managed key"""

    bucket_key_enabled: Optional[bool] = None
    """Use a S3 bucket key for KMS encryption. Defaults to true with KMS."""

    lifecycle_rules: Optional[list[dict]] = None
    """Lifecycle rules replacing the default one-year log retention"""

    prevent_destroy: bool = False
    """Protect the bucket from deletion"""


@dataclass
class S3PrivateBucketArgs:
    bucket: Optional[str] = None
    """Bucket name. The log bucket is named ``{bucket}-logs``."""

    bucket_prefix: Optional[str] = None
    """Prefix of the generated bucket name, conflicts with ``bucket``"""

    tags: dict[str, str] = field(default_factory=dict)
    """Tags for the bucket and its log bucket"""

    sse_algorithm: SSEAlgorithm = SSEAlgorithm.AES
    """Server-side encryption algorithm, uploads using another algorithm are denied"""

    kms_master_key_id: Optional[Input[str]] = None
    """KMS key used when ``sse_algorithm`` is ``aws:kms``"""

    bucket_key_enabled: Optional[bool] = None
    """Use a S3 bucket key for KMS encryption, and deny uploads without one. Defaults to true with KMS."""

    log_prefix: Optional[str] = None
    """Key prefix of the access logs in the log bucket. Defaults to the ``log_prefix`` configuration (``logs/``)."""

    versioned: bool = False
    """Whether this bucket should be versioned or not"""

    lifecycle_rules: Optional[list[dict]] = None
    """Lifecycle rules replacing the default one, which archives then expires noncurrent versions"""

    prevent_destroy: bool = False
    """Protect the bucket and its log bucket from deletion"""


@dataclass
class S3PublicBucketArgs:
    bucket: Optional[str] = None
    """Bucket name, generated by Pulumi when unset"""

    bucket_prefix: Optional[str] = None
    """Prefix of the generated bucket name, conflicts with ``bucket``"""

    tags: dict[str, str] = field(default_factory=dict)
    """Tags for the bucket"""

    force_destroy: bool = True
    """Delete every object when the bucket is destroyed"""

    versioned: bool = False
    """Whether this bucket should be versioned or not"""

    cors: Optional[list[dict]] = None
    """CORS rules, defaults to GET and HEAD requests from any origin"""

    force_tls: bool = False
    """Deny requests not using TLS 1.2 or higher"""


@dataclass
class S3WebsiteBucketArgs:
    bucket: Optional[str] = None
    """Bucket name, generated by Pulumi when unset"""

    bucket_prefix: Optional[str] = None
    """Prefix of the generated bucket name, conflicts with ``bucket``"""

    tags: dict[str, str] = field(default_factory=dict)
    """Tags for the bucket"""

    force_destroy: bool = True
    """Delete every object when the bucket is destroyed"""

    versioned: bool = False
    """Whether this bucket should be versioned or not"""

    cors: Optional[list[dict]] = None
    """CORS rules, defaults to GET and HEAD requests from any origin"""

    index: str = "index.html"
    """Index document suffix"""

    error_index: str = "index.html"
    """Key of the document returned on 4XX errors"""

    rules: Optional[list[dict]] = None
    """Website routing rules"""
