from pulumi import ResourceOptions

from cds_constructs.lib.aws.base import AWSModule
from cds_constructs.lib.s3 import (
    S3PrivateBucket,
    S3PrivateBucketArgs,
    S3PublicBucket,
    S3PublicBucketArgs,
    S3WebsiteBucket,
    S3WebsiteBucketArgs,
)
from cds_constructs.lib.tags import get_tags
from .config import (
    S3Args,
    S3BucketKind,
    S3Exports,
    S3PrivateBucketConfig,
    S3PublicBucketConfig,
    S3WebsiteBucketConfig,
)


class S3Buckets(AWSModule):
    def build(self, config: S3Args) -> list[S3Exports]:
        return (
            [self._create_private_bucket(bucket) for bucket in config.private]
            + [self._create_public_bucket(bucket) for bucket in config.public]
            + [self._create_website_bucket(bucket) for bucket in config.website]
        )

    def _create_private_bucket(self, config: S3PrivateBucketConfig) -> S3Exports:
        bucket = S3PrivateBucket(
            config.name,
            S3PrivateBucketArgs(
                bucket=config.name,
                tags=get_tags("s3", S3BucketKind.PRIVATE.value, config.name),
                sse_algorithm=config.sse_algorithm,
                kms_master_key_id=config.kms_master_key_id,
                bucket_key_enabled=config.bucket_key_enabled,
                log_prefix=config.log_prefix,
                versioned=config.versioned,
                lifecycle_rules=config.lifecycle_rules,
                prevent_destroy=config.prevent_destroy,
            ),
            opts=ResourceOptions(parent=self),
        )

        return self._export(config.name, bucket, S3BucketKind.PRIVATE)

    def _create_public_bucket(self, config: S3PublicBucketConfig) -> S3Exports:
        bucket = S3PublicBucket(
            config.name,
            S3PublicBucketArgs(
                bucket=config.name,
                tags=get_tags("s3", S3BucketKind.PUBLIC.value, config.name),
                versioned=config.versioned,
                cors=config.cors,
                force_tls=config.force_tls,
            ),
            opts=ResourceOptions(parent=self),
        )

        return self._export(config.name, bucket, S3BucketKind.PUBLIC)

    def _create_website_bucket(self, config: S3WebsiteBucketConfig) -> S3Exports:
        bucket = S3WebsiteBucket(
            config.name,
            S3WebsiteBucketArgs(
                bucket=config.name,
                tags=get_tags("s3", S3BucketKind.WEBSITE.value, config.name),
                versioned=config.versioned,
                cors=config.cors,
                index=config.index,
                error_index=config.error_index,
                rules=config.rules,
            ),
            opts=ResourceOptions(parent=self),
        )

        return self._export(config.name, bucket, S3BucketKind.WEBSITE)

    @staticmethod
    def _export(name: str, bucket, kind: S3BucketKind) -> S3Exports:
        return S3Exports(
            bucket=bucket.bucket,
            friendly_name=name,
            arn=bucket.arn,
            bucket_domain_name=bucket.resource.bucket_domain_name,
            kind=kind,
        )
