from .ipv4 import check_ipv4
from .s3_bucket_name import check_s3_bucket_name
