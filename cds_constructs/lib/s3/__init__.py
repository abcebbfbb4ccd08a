from .bucket_settings import check_bucket_name
from .log_bucket import S3LogBucket
from .private_bucket import S3PrivateBucket
from .public_bucket import S3PublicBucket
from .types import S3LogBucketArgs, S3PrivateBucketArgs, S3PublicBucketArgs, S3WebsiteBucketArgs
from .website_bucket import S3WebsiteBucket
