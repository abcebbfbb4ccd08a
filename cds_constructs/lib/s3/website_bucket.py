from typing import Optional

from pulumi import ComponentResource, ResourceOptions
from pulumi_aws import s3

from .bucket_settings import (
    check_bucket_name,
    create_cors,
    create_ownership_controls,
    create_public_access_block,
    create_versioning,
)
from .types import S3WebsiteBucketArgs

WEBSITE_CORS_MAX_AGE_SECONDS = 86_400


class S3WebsiteBucket(ComponentResource):
    """
    A static website bucket with good defaults, suitable for throwable preview builds or static API documentations.

    Objects are public through the ``public-read`` ACL, so ACLs are kept enabled (``BucketOwnerPreferred``) and the
    public access block is lifted.
    """

    def __init__(self, name: str, args: S3WebsiteBucketArgs, opts: Optional[ResourceOptions] = None):
        check_bucket_name(self.__class__.__name__, args.bucket)

        super().__init__("pkg:cds:s3:websitebucket", name, None, opts)

        self.resource = s3.Bucket(
            name,
            bucket=args.bucket,
            bucket_prefix=args.bucket_prefix,
            force_destroy=args.force_destroy,
            tags=args.tags,
            opts=ResourceOptions(parent=self),
        )

        self.ownership_controls = create_ownership_controls(name, self.resource, "BucketOwnerPreferred")
        self.public_access_block = create_public_access_block(name, self.resource, blocked=False)
        self.acl = s3.BucketAclV2(
            f"{name}-acl",
            bucket=self.resource.id,
            acl="public-read",
            opts=ResourceOptions(
                parent=self.resource,
                depends_on=[self.ownership_controls, self.public_access_block],
            ),
        )
        self.cors = create_cors(name, self.resource, args.cors, WEBSITE_CORS_MAX_AGE_SECONDS)
        self.website = s3.BucketWebsiteConfigurationV2(
            f"{name}-website",
            bucket=self.resource.id,
            index_document={"suffix": args.index},
            error_document={"key": args.error_index},
            routing_rules=args.rules,
            opts=ResourceOptions(parent=self.resource),
        )
        self.versioning = create_versioning(name, self.resource) if args.versioned else None

        self.id = self.resource.id
        self.arn = self.resource.arn
        self.bucket = self.resource.bucket
        self.website_endpoint = self.website.website_endpoint

        self.register_outputs(
            {
                "id": self.id,
                "arn": self.arn,
                "bucket": self.bucket,
                "website_endpoint": self.website_endpoint,
            }
        )
