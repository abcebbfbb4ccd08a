from typing import Optional

from pulumi import ComponentResource, ResourceOptions, log
from pulumi_aws import s3

from cds_constructs.lib.config import get_default_log_prefix, tag_prefix
from cds_constructs.lib.iam import create_bucket_policy
from cds_constructs.lib.iam.statements import SSEAlgorithm, create_private_bucket_statements
from .bucket_settings import (
    check_bucket_name,
    create_encryption,
    create_lifecycle,
    create_ownership_controls,
    create_public_access_block,
    create_versioning,
    normalize_log_prefix,
)
from .log_bucket import S3LogBucket
from .types import S3LogBucketArgs, S3PrivateBucketArgs

DEFAULT_VERSIONS_LIFECYCLE_RULES = [
    {
        "id": "AutoArchiveVersions",
        "status": "Enabled",
        "filter": {"prefix": ""},
        "noncurrent_version_transitions": [{"noncurrent_days": 7, "storage_class": "GLACIER"}],
        "noncurrent_version_expiration": {"noncurrent_days": 365},
    }
]
"""Noncurrent versions move to Glacier after a week and are kept for a year"""


class S3PrivateBucket(ComponentResource):
    """
    A private and encrypted S3 bucket.

    Public access is blocked and ACLs are disabled. The bucket policy denies requests not using TLS 1.2 or higher and
    uploads not using the bucket encryption algorithm. Every access is logged in a companion ``S3LogBucket``.

    Example::

        S3PrivateBucket(
            "state",
            S3PrivateBucketArgs(
                bucket="terraform-state",
                versioned=True,
                sse_algorithm=SSEAlgorithm.KMS,
                kms_master_key_id=key.arn,
            ),
            opts=ResourceOptions(parent=self),
        )
    """

    def __init__(self, name: str, args: S3PrivateBucketArgs, opts: Optional[ResourceOptions] = None):
        check_bucket_name(self.__class__.__name__, args.bucket)

        super().__init__("pkg:cds:s3:privatebucket", name, None, opts)

        self._args = args
        self._sse_algorithm = SSEAlgorithm(args.sse_algorithm)
        self._bucket_key_enabled = (
            args.bucket_key_enabled if args.bucket_key_enabled is not None else self._sse_algorithm == SSEAlgorithm.KMS
        )
        log_prefix = normalize_log_prefix(args.log_prefix if args.log_prefix is not None else get_default_log_prefix())

        self.resource = self._create_bucket(name)

        self.log_bucket = S3LogBucket(
            f"{name}-log",
            S3LogBucketArgs(
                bucket=f"{args.bucket}-logs" if args.bucket else None,
                tags=self._log_bucket_tags(),
                log_prefix=log_prefix,
                prevent_destroy=args.prevent_destroy,
            ),
            opts=ResourceOptions(parent=self),
        )
        self.logging = s3.BucketLoggingV2(
            f"{name}-logging",
            bucket=self.resource.id,
            target_bucket=self.log_bucket.id,
            target_prefix=log_prefix,
            opts=ResourceOptions(parent=self.resource),
        )

        self.id = self.resource.id
        self.arn = self.resource.arn
        self.bucket = self.resource.bucket

        self.register_outputs(
            {
                "id": self.id,
                "arn": self.arn,
                "bucket": self.bucket,
                "log_bucket": self.log_bucket.bucket,
            }
        )

    def _log_bucket_tags(self) -> dict[str, str]:
        """The bucket tags, with the ``Name`` and role tags relabelled for the log bucket"""
        tags = dict(self._args.tags)

        if "Name" in tags:
            tags["Name"] = f"{tags['Name']}-logs"
        if f"{tag_prefix}role" in tags:
            tags[f"{tag_prefix}role"] = "log"

        return tags

    def _create_bucket(self, name: str) -> s3.Bucket:
        args = self._args

        resource = s3.Bucket(
            name,
            bucket=args.bucket,
            bucket_prefix=args.bucket_prefix,
            tags=args.tags,
            opts=ResourceOptions(parent=self, protect=args.prevent_destroy),
        )

        self.ownership_controls = create_ownership_controls(name, resource)
        self.public_access_block = create_public_access_block(name, resource)
        self.lifecycle = self._create_lifecycle(name, resource)
        self.encryption = create_encryption(
            name,
            resource,
            self._sse_algorithm,
            kms_master_key_id=args.kms_master_key_id,
            bucket_key_enabled=self._bucket_key_enabled,
        )
        self.policy = create_bucket_policy(
            f"{name}-policy",
            resource,
            lambda arn: create_private_bucket_statements(arn, self._sse_algorithm, self._bucket_key_enabled),
            opts=ResourceOptions(parent=self.public_access_block),
        )
        self.versioning = create_versioning(name, resource) if args.versioned else None

        return resource

    def _create_lifecycle(self, name: str, resource: s3.Bucket) -> Optional[s3.BucketLifecycleConfigurationV2]:
        """
        Configure lifecycle on the bucket.

        Noncurrent versions are archived then expired after a year on versioned buckets. Unversioned buckets get no
        lifecycle by default.

        You can override the default lifecycle via the ``lifecycle_rules`` argument.
        """
        rules = self._args.lifecycle_rules
        if rules is None:
            rules = DEFAULT_VERSIONS_LIFECYCLE_RULES if self._args.versioned else []

        log.debug(f"bucket `{name}` lifecycle rules: {[rule.get('id') for rule in rules]}", resource=self)

        return create_lifecycle(name, resource, rules)
