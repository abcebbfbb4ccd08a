from .s3 import S3Buckets
