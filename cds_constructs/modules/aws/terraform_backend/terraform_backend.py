from pulumi import ResourceOptions
from pulumi_aws import kms

from cds_constructs.lib.aws.base import AWSModule
from cds_constructs.lib.iam import SSEAlgorithm
from cds_constructs.lib.s3 import S3PrivateBucket, S3PrivateBucketArgs, check_bucket_name
from cds_constructs.lib.tags import get_tags
from .config import TerraformBackendArgs, TerraformBackendExports


class TerraformBackend(AWSModule):
    """
    Everything needed to host a secure remote state backend (Terraform's ``s3`` backend, or Pulumi's self-managed
    one) on AWS: a versioned private bucket, protected from deletion, encrypted with a dedicated KMS key.
    """

    def build(self, config: TerraformBackendArgs) -> TerraformBackendExports:
        check_bucket_name(self.__class__.__name__, config.bucket)

        tags = {
            **get_tags("terraform", "backend", config.bucket),
            "Stack": self.__class__.__name__,
            "Owner": self.aws_account_id,
            **config.tags,
        }

        key = kms.Key(
            "key",
            description=f"Terraform state '{config.bucket}' bucket master key.",
            deletion_window_in_days=config.deletion_window_in_days,
            enable_key_rotation=True,
            tags=tags,
            opts=ResourceOptions(parent=self),
        )
        alias = kms.Alias(
            "key-alias",
            name=f"alias/terraform-key-{self.aws_account_id}",
            target_key_id=key.arn,
            opts=ResourceOptions(parent=key),
        )

        bucket = S3PrivateBucket(
            "bucket",
            S3PrivateBucketArgs(
                bucket=config.bucket,
                versioned=True,
                prevent_destroy=True,
                sse_algorithm=SSEAlgorithm.KMS,
                kms_master_key_id=key.arn,
                bucket_key_enabled=True,
                tags={"Area": "terraform", "StackId": self.module_name, **tags},
            ),
            opts=ResourceOptions(parent=self),
        )

        return TerraformBackendExports(
            bucket=bucket.bucket,
            bucket_arn=bucket.arn,
            log_bucket=bucket.log_bucket.bucket,
            kms_key_arn=key.arn,
            kms_alias=alias.name,
        )
