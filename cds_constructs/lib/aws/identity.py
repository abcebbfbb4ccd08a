from functools import cache

from pulumi_aws import get_caller_identity, get_partition


@cache
def get_account_id() -> str:
    """
    Get the id of the account the program deploys to, looked up once per program
    :return: account id
    """
    return get_caller_identity().account_id


@cache
def get_partition_name() -> str:
    """
    Get the partition of the program region ("aws", "aws-cn", "aws-us-gov")
    :return: partition name
    """
    return get_partition().partition
