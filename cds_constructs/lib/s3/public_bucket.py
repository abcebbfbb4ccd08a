from typing import Optional

from pulumi import ComponentResource, ResourceOptions
from pulumi_aws import s3

from cds_constructs.lib.iam import create_bucket_policy
from cds_constructs.lib.iam.statements import create_public_bucket_statements
from .bucket_settings import check_bucket_name, create_cors, create_public_access_block, create_versioning
from .types import S3PublicBucketArgs

PUBLIC_CORS_MAX_AGE_SECONDS = 3_600


class S3PublicBucket(ComponentResource):
    """
    A read-only public and unencrypted S3 bucket, suitable for hosting static website assets.

    Objects are readable by anyone through the bucket policy, which can also deny requests not using TLS 1.2 or
    higher (``force_tls``).
    """

    def __init__(self, name: str, args: S3PublicBucketArgs, opts: Optional[ResourceOptions] = None):
        check_bucket_name(self.__class__.__name__, args.bucket)

        super().__init__("pkg:cds:s3:publicbucket", name, None, opts)

        self.resource = s3.Bucket(
            name,
            bucket=args.bucket,
            bucket_prefix=args.bucket_prefix,
            force_destroy=args.force_destroy,
            tags=args.tags,
            opts=ResourceOptions(parent=self),
        )

        # new buckets block public policies, which would reject ours
        self.public_access_block = create_public_access_block(name, self.resource, blocked=False)
        self.cors = create_cors(name, self.resource, args.cors, PUBLIC_CORS_MAX_AGE_SECONDS)
        self.policy = create_bucket_policy(
            f"{name}-policy",
            self.resource,
            lambda arn, force_tls: create_public_bucket_statements(arn, force_tls=force_tls),
            args.force_tls,
            opts=ResourceOptions(parent=self.public_access_block, depends_on=[self.public_access_block]),
        )
        self.versioning = create_versioning(name, self.resource) if args.versioned else None

        self.id = self.resource.id
        self.arn = self.resource.arn
        self.bucket = self.resource.bucket

        self.register_outputs({"id": self.id, "arn": self.arn, "bucket": self.bucket})
