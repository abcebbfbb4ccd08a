from typing import Optional

from pulumi import Input, ResourceOptions
from pulumi_aws import s3

from cds_constructs.lib.iam import SSEAlgorithm
from cds_constructs.lib.validation import check_s3_bucket_name
from .types import DEFAULT_CORS_RULE


def check_bucket_name(construct: str, bucket: Optional[str]) -> None:
    """
    Reject an explicit bucket name breaking the S3 naming rules, before anything gets created

    :param construct: Name of the calling construct, for the error message
    :param bucket: The bucket name, None when Pulumi generates it
    """
    if bucket and not check_s3_bucket_name(bucket):
        raise ValueError(f"{construct}: '{bucket}' bucket name is invalid.")


def normalize_log_prefix(prefix: str) -> str:
    """
    S3 writes access logs to ``{prefix}{timestamp}``, the prefix must end with a slash to be a folder

    :param prefix: A log prefix, e.g. ``/logs``
    :return: The prefix without a leading slash and with a trailing one, e.g. ``logs/``. An empty prefix stays empty.
    """
    prefix = prefix.strip("/")

    return f"{prefix}/" if prefix else ""


def create_ownership_controls(
    name: str, bucket: s3.Bucket, object_ownership: str = "BucketOwnerEnforced"
) -> s3.BucketOwnershipControls:
    """
    ``BucketOwnerEnforced`` disables ACLs, the bucket owner owns every object.
    """
    return s3.BucketOwnershipControls(
        f"{name}-ownership-controls",
        bucket=bucket.id,
        rule={"object_ownership": object_ownership},
        opts=ResourceOptions(parent=bucket),
    )


def create_public_access_block(name: str, bucket: s3.Bucket, blocked: bool = True) -> s3.BucketPublicAccessBlock:
    return s3.BucketPublicAccessBlock(
        f"{name}-public-access-block",
        bucket=bucket.id,
        block_public_acls=blocked,
        block_public_policy=blocked,
        ignore_public_acls=blocked,
        restrict_public_buckets=blocked,
        opts=ResourceOptions(parent=bucket),
    )


def create_encryption(
    name: str,
    bucket: s3.Bucket,
    sse_algorithm: SSEAlgorithm,
    kms_master_key_id: Optional[Input[str]] = None,
    bucket_key_enabled: Optional[bool] = None,
) -> s3.BucketServerSideEncryptionConfigurationV2:
    """
    Set-up default encryption on a bucket.

    The master key and the bucket key only apply to KMS encryption. The bucket key is enabled by default with KMS
    (cost saving), set ``bucket_key_enabled`` to false to disable it.

    More about the bucket key feature at:
    https://docs.aws.amazon.com/AmazonS3/latest/userguide/bucket-key.html

    :param name: Construct name
    :param bucket: The bucket to encrypt
    :param sse_algorithm: Server-side encryption algorithm
    :param kms_master_key_id: KMS key id or ARN
    :param bucket_key_enabled: Use a S3 bucket key
    :return: s3.BucketServerSideEncryptionConfigurationV2
    """
    sse_algorithm = SSEAlgorithm(sse_algorithm)
    by_default = {"sse_algorithm": sse_algorithm.value}
    rule = {"apply_server_side_encryption_by_default": by_default}

    if sse_algorithm == SSEAlgorithm.KMS:
        if kms_master_key_id is not None:
            by_default["kms_master_key_id"] = kms_master_key_id
        rule["bucket_key_enabled"] = True if bucket_key_enabled is None else bucket_key_enabled

    return s3.BucketServerSideEncryptionConfigurationV2(
        f"{name}-sse-encryption",
        bucket=bucket.id,
        rules=[rule],
        opts=ResourceOptions(parent=bucket),
    )


def create_versioning(name: str, bucket: s3.Bucket) -> s3.BucketVersioningV2:
    return s3.BucketVersioningV2(
        f"{name}-versioning",
        bucket=bucket.id,
        versioning_configuration={"status": "Enabled"},
        opts=ResourceOptions(parent=bucket),
    )


def create_lifecycle(name: str, bucket: s3.Bucket, rules: list[dict]) -> Optional[s3.BucketLifecycleConfigurationV2]:
    """
    S3 rejects a lifecycle configuration without rules, nothing is created when ``rules`` is empty.
    """
    if not rules:
        return None

    return s3.BucketLifecycleConfigurationV2(
        f"{name}-lifecycle",
        bucket=bucket.id,
        rules=rules,
        opts=ResourceOptions(parent=bucket),
    )


def create_cors(
    name: str, bucket: s3.Bucket, cors: Optional[list[dict]], max_age_seconds: int
) -> s3.BucketCorsConfigurationV2:
    """
    Allow cross-origin requests. Without rules, GET and HEAD requests are allowed from any origin.
    """
    return s3.BucketCorsConfigurationV2(
        f"{name}-cors",
        bucket=bucket.id,
        cors_rules=cors or [{**DEFAULT_CORS_RULE, "max_age_seconds": max_age_seconds}],
        opts=ResourceOptions(parent=bucket),
    )
