from typing import Optional

from pulumi import ComponentResource, InvokeOptions, ResourceOptions, log
from pulumi_aws import get_caller_identity_output, s3

from cds_constructs.lib.iam import create_bucket_policy
from cds_constructs.lib.iam.statements import SSEAlgorithm, create_allow_logging_service_statement
from .bucket_settings import (
    check_bucket_name,
    create_encryption,
    create_lifecycle,
    create_ownership_controls,
    create_public_access_block,
)
from .types import S3LogBucketArgs

DEFAULT_LOG_LIFECYCLE_RULES = [
    {
        "id": "AutoArchive",
        "status": "Enabled",
        "filter": {"prefix": ""},
        "transitions": [
            {"days": 30, "storage_class": "STANDARD_IA"},
            {"days": 90, "storage_class": "GLACIER"},
        ],
        "expiration": {"days": 365},
    }
]
"""Logs move to infrequent access after a month, to Glacier after three, and are kept for a year"""


class S3LogBucket(ComponentResource):
    """
    A private bucket receiving S3 server access logs.

    Public access is blocked and ACLs are disabled. The bucket policy only lets the S3 logging service write under
    the log prefix, for logs of buckets owned by the same account.
    """

    def __init__(self, name: str, args: S3LogBucketArgs, opts: Optional[ResourceOptions] = None):
        check_bucket_name(self.__class__.__name__, args.bucket)

        super().__init__("pkg:cds:s3:logbucket", name, None, opts)

        self._args = args
        bucket_key_enabled = (
            args.bucket_key_enabled
            if args.bucket_key_enabled is not None
            else SSEAlgorithm(args.sse_algorithm) == SSEAlgorithm.KMS
        )

        self.resource = s3.Bucket(
            name,
            bucket=args.bucket,
            tags=args.tags,
            opts=ResourceOptions(parent=self, protect=args.prevent_destroy),
        )
        self.ownership_controls = create_ownership_controls(name, self.resource)
        self.public_access_block = create_public_access_block(name, self.resource)
        self.lifecycle = create_lifecycle(
            name,
            self.resource,
            args.lifecycle_rules if args.lifecycle_rules is not None else DEFAULT_LOG_LIFECYCLE_RULES,
        )
        self.policy = self._create_policy(name)
        self.encryption = create_encryption(
            name,
            self.resource,
            args.sse_algorithm,
            kms_master_key_id=args.kms_master_key_id,
            bucket_key_enabled=bucket_key_enabled,
        )

        self.id = self.resource.id
        self.arn = self.resource.arn
        self.bucket = self.resource.bucket

        self.register_outputs({"id": self.id, "arn": self.arn, "bucket": self.bucket})

    def _create_policy(self, name: str) -> s3.BucketPolicy:
        """
        Give the S3 logging service access to the log prefix
        """
        log.debug(f"granting the logging service access to `{self._args.log_prefix}`", resource=self)

        identity = get_caller_identity_output(opts=InvokeOptions(parent=self))

        return create_bucket_policy(
            f"{name}-policy",
            self.resource,
            lambda arn, account_id, log_prefix: [create_allow_logging_service_statement(arn, account_id, log_prefix)],
            identity.account_id,
            f"/{self._args.log_prefix.lstrip('/')}",
            opts=ResourceOptions(parent=self.public_access_block),
        )
