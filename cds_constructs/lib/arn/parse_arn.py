import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ARN_PREFIX = "arn:"
ARN_SECTIONS_LENGTH = 6
ARN_SECTION_DELIMITER = ":"

_ARN_HELP = """
An ARN string representation must follow the general formats:
  - arn:partition:service:resource-type/resource-id
  - arn:partition:service:region:account-id:resource-id
  - arn:partition:service:region:account-id:resource-type/resource-id
  - arn:partition:service:region:account-id:resource-type:resource-id

More at https://docs.aws.amazon.com/general/latest/gr/aws-arns-and-namespaces.html"""


class ArnFormatError(Exception):
    def __init__(self, reason: str):
        super().__init__(f"Invalid ARN: {reason}\n{_ARN_HELP}")
        self.reason = reason


@dataclass(frozen=True)
class Arn:
    partition: str = ""
    """AWS partition ("aws", "aws-cn", "aws-us-gov")"""

    service: str = ""
    """Service namespace ("s3", "iam", "rds",...)"""

    region: str = ""
    """Region code, empty for global resources"""

    account_id: str = ""
    """Owning account id, empty for resources such as S3 buckets"""

    resource: str = ""
    """
    Resource identifier. May itself contain colons (``db:mysql-db``), which are preserved.
    """

    def __str__(self) -> str:
        return ARN_SECTION_DELIMITER.join(
            ["arn", self.partition, self.service, self.region, self.account_id, self.resource]
        )


def parse_arn(value: str) -> Arn:
    """
    Parse an ARN string into its sections.

    The first five colon-delimited tokens are taken as-is and everything after the fifth delimiter is kept as the
    resource, so resource identifiers containing colons survive the round trip.

    Example:
        "arn:aws:rds:eu-west-1:123456789012:db:mysql-db"
        becomes
        Arn(partition="aws", service="rds", region="eu-west-1", account_id="123456789012", resource="db:mysql-db")

    Empty sections are returned as empty strings, nothing is inferred.

    :param value: ARN string
    :return: Arn
    :raises ArnFormatError: when the prefix is missing or the section count is wrong
    """
    if not value.startswith(ARN_PREFIX):
        raise ArnFormatError("Prefix is missing.")

    parts = value.split(ARN_SECTION_DELIMITER)
    sections = parts[: ARN_SECTIONS_LENGTH - 1] + [ARN_SECTION_DELIMITER.join(parts[ARN_SECTIONS_LENGTH - 1 :])]

    if len(sections) != ARN_SECTIONS_LENGTH:
        raise ArnFormatError("Wrong number of sections.")

    _, partition, service, region, account_id, resource = sections
    logger.debug("parsed arn [%s] into service [%s] resource [%s]", value, service, resource)

    return Arn(
        partition=partition,
        service=service,
        region=region,
        account_id=account_id,
        resource=resource,
    )


def is_arn(value: str) -> bool:
    try:
        parse_arn(value)
    except ArnFormatError:
        return False
    return True


def has_arn_service(value: str, service: str) -> bool:
    """
    Check that ``value`` is an ARN belonging to ``service``

    :param value: ARN string
    :param service: Service namespace, ("s3", "iam",...)
    :return: bool
    """
    try:
        return parse_arn(value).service == service
    except ArnFormatError:
        return False
