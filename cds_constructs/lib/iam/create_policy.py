import json
from typing import Any, Callable, Optional

from pulumi import Input, Output, ResourceOptions, log
from pulumi_aws import s3

from .policy_document import generate_policy_document
from .types import PolicyStatement

statements_factory = Callable[..., list[PolicyStatement]]
"""
A `statements_factory` is a callable receiving the resolved bucket ARN (then any extra inputs) like::

def my_statements(bucket_arn: str, account_id: str) -> list[PolicyStatement]:
    return [create_allow_logging_service_statement(bucket_arn, account_id, "/logs")]

"""


def create_bucket_policy(
    name: str,
    bucket: s3.Bucket,
    factory: statements_factory,
    *inputs: Input[Any],
    opts: Optional[ResourceOptions] = None,
) -> s3.BucketPolicy:
    """
    Attach a bucket policy built from policy statements

    Statement builders work on plain strings, so the document is rendered once the bucket ARN and every extra input
    are known.

    Example::

        create_bucket_policy(
            "policy",
            bucket,
            lambda arn, force_tls: create_public_bucket_statements(arn, force_tls=force_tls),
            config.force_tls,
            opts=ResourceOptions(parent=bucket),
        )

    :param name: Resource name
    :param bucket: The bucket to attach the policy to
    :param factory: Callable returning the statements, see ``statements_factory``
    :param inputs: Extra inputs forwarded to ``factory`` after the bucket ARN
    :param opts: ResourceOptions for the policy
    :return: s3.BucketPolicy
    """

    def render(args: list) -> str:
        statements = factory(*args)
        log.debug(f"rendering policy `{name}` with statements {[statement.sid for statement in statements]}")
        return json.dumps(generate_policy_document(statements))

    return s3.BucketPolicy(
        name,
        bucket=bucket.id,
        policy=Output.all(bucket.arn, *inputs).apply(render),
        opts=opts,
    )
