import re

from .ipv4 import check_ipv4

BUCKET_NAME_PATTERN = re.compile(r"[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]")

RESERVED_PREFIXES = ("xn--",)
RESERVED_SUFFIXES = ("-s3alias",)


def check_s3_bucket_name(value: str) -> bool:
    """
    Check a bucket name against the S3 naming rules.

    A valid name:
        - is between 3 and 63 characters long
        - only has lowercase letters, numbers, dots (.) and hyphens (-)
        - begins and ends with a letter or number
        - has no two adjacent periods
        - is not formatted as an IP address (192.168.5.4)
        - does not start with ``xn--`` nor end with ``-s3alias``

    See https://docs.aws.amazon.com/AmazonS3/latest/userguide/bucketnamingrules.html

    :param value: Bucket name
    :return: bool
    """
    if not BUCKET_NAME_PATTERN.fullmatch(value):
        return False

    if value.startswith(RESERVED_PREFIXES) or value.endswith(RESERVED_SUFFIXES):
        return False

    return ".." not in value and not check_ipv4(value)
