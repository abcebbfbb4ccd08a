from enum import Enum
from typing import Callable, Optional, Union

from cds_constructs.lib.arn import has_arn_service
from ..types import Condition, Effect, PolicyStatement, Principal, S3StatementOptions

LOGGING_SERVICE_PRINCIPAL = "logging.s3.amazonaws.com"


class SSEAlgorithm(str, Enum):
    AES = "AES256"
    KMS = "aws:kms"


class StatementKind(str, Enum):
    """Bucket policy statements this module knows how to build. The value doubles as the statement ``Sid``."""

    ALLOW_PUBLIC_GET_OBJECT = "AllowPublicGetObject"
    FORCE_TLS_REQUESTS_ONLY = "ForceTLSRequestsOnly"
    ENFORCE_TLSV12_OR_HIGHER = "EnforceTLSv12OrHigher"
    DENY_INCORRECT_ENCRYPTION_HEADER = "DenyIncorrectEncryptionHeader"
    DENY_UNENCRYPTED_OBJECT_UPLOADS = "DenyUnencryptedObjectUploads"
    DENY_BUCKET_KEYLESS_UPLOADS = "DenyBucketKeylessUploads"
    ALLOW_LOGGING_SERVICE = "AllowLoggingService"


class StatementArgumentError(ValueError):
    pass


def _check_bucket_arn(kind: StatementKind, bucket_arn: str) -> None:
    if not has_arn_service(bucket_arn, "s3"):
        raise StatementArgumentError(f"{kind.value} requires an ARN for a S3 bucket resource.")
    if bucket_arn.endswith("/*"):
        raise StatementArgumentError(f"{kind.value} ARN must not end with a slash wildcard (`/*`).")


def _principals(options: Optional[S3StatementOptions]) -> list[Principal]:
    if options and options.principals is not None:
        return list(options.principals)
    return [Principal(type="AWS", identifiers=["*"])]


def create_allow_public_get_object_statement(
    bucket_arn: str, options: Optional[S3StatementOptions] = None
) -> PolicyStatement:
    """
    Allow anyone to read the bucket objects

    :param bucket_arn: ARN of the bucket, without a trailing ``/*``
    :param options: Principal override
    :return: PolicyStatement
    """
    kind = StatementKind.ALLOW_PUBLIC_GET_OBJECT
    _check_bucket_arn(kind, bucket_arn)

    return PolicyStatement(
        sid=kind.value,
        effect=Effect.ALLOW,
        actions=["s3:GetObject"],
        principals=_principals(options),
        resources=[f"{bucket_arn}/*"],
    )


def create_force_tls_requests_only_statement(
    bucket_arn: str, options: Optional[S3StatementOptions] = None
) -> PolicyStatement:
    """
    Deny every request made over plain HTTP, on the bucket and its objects

    :param bucket_arn: ARN of the bucket, without a trailing ``/*``
    :param options: Principal override
    :return: PolicyStatement
    """
    kind = StatementKind.FORCE_TLS_REQUESTS_ONLY
    _check_bucket_arn(kind, bucket_arn)

    return PolicyStatement(
        sid=kind.value,
        effect=Effect.DENY,
        actions=["s3:*"],
        principals=_principals(options),
        resources=[bucket_arn, f"{bucket_arn}/*"],
        conditions=[Condition(test="Bool", variable="aws:SecureTransport", values=["false"])],
    )


def create_enforce_tlsv12_or_higher_statement(
    bucket_arn: str, options: Optional[S3StatementOptions] = None
) -> PolicyStatement:
    """
    Deny every request negotiated with a TLS version older than 1.2

    :param bucket_arn: ARN of the bucket, without a trailing ``/*``
    :param options: Principal override
    :return: PolicyStatement
    """
    kind = StatementKind.ENFORCE_TLSV12_OR_HIGHER
    _check_bucket_arn(kind, bucket_arn)

    return PolicyStatement(
        sid=kind.value,
        effect=Effect.DENY,
        actions=["s3:*"],
        principals=_principals(options),
        resources=[bucket_arn, f"{bucket_arn}/*"],
        conditions=[Condition(test="NumericLessThan", variable="s3:TlsVersion", values=["1.2"])],
    )


def create_deny_incorrect_encryption_header_statement(
    bucket_arn: str,
    sse_algorithm: Union[SSEAlgorithm, str],
    options: Optional[S3StatementOptions] = None,
) -> PolicyStatement:
    """
    Deny uploads asking for an encryption algorithm other than ``sse_algorithm``

    :param bucket_arn: ARN of the bucket, without a trailing ``/*``
    :param sse_algorithm: The only server-side encryption algorithm accepted
    :param options: Principal override
    :return: PolicyStatement
    """
    kind = StatementKind.DENY_INCORRECT_ENCRYPTION_HEADER
    _check_bucket_arn(kind, bucket_arn)

    return PolicyStatement(
        sid=kind.value,
        effect=Effect.DENY,
        actions=["s3:PutObject"],
        principals=_principals(options),
        resources=[f"{bucket_arn}/*"],
        conditions=[
            Condition(
                test="StringNotEquals",
                variable="s3:x-amz-server-side-encryption",
                values=[SSEAlgorithm(sse_algorithm).value],
            )
        ],
    )


def create_deny_unencrypted_object_uploads_statement(
    bucket_arn: str, options: Optional[S3StatementOptions] = None
) -> PolicyStatement:
    kind = StatementKind.DENY_UNENCRYPTED_OBJECT_UPLOADS
    _check_bucket_arn(kind, bucket_arn)

    return PolicyStatement(
        sid=kind.value,
        effect=Effect.DENY,
        actions=["s3:PutObject"],
        principals=_principals(options),
        resources=[f"{bucket_arn}/*"],
        conditions=[Condition(test="Null", variable="s3:x-amz-server-side-encryption", values=["true"])],
    )


def create_deny_bucket_keyless_uploads_statement(
    bucket_arn: str, options: Optional[S3StatementOptions] = None
) -> PolicyStatement:
    kind = StatementKind.DENY_BUCKET_KEYLESS_UPLOADS
    _check_bucket_arn(kind, bucket_arn)

    return PolicyStatement(
        sid=kind.value,
        effect=Effect.DENY,
        actions=["s3:PutObject"],
        principals=_principals(options),
        resources=[f"{bucket_arn}/*"],
        conditions=[
            Condition(
                test="Null",
                variable="s3:x-amz-server-side-encryption-bucket-key-enabled",
                values=["true"],
            )
        ],
    )


def create_allow_logging_service_statement(bucket_arn: str, account_id: str, log_prefix: str) -> PolicyStatement:
    """
    Allow the S3 server access logging service to write logs under ``log_prefix``

    The principal is always the logging service, and writes are only accepted for logs coming from this bucket and
    account.

    Example:
        create_allow_logging_service_statement("arn:aws:s3:::logs", "123456789012", "/access/")
        grants access to
        "arn:aws:s3:::logs/access/*"

    :param bucket_arn: ARN of the log bucket, without a trailing ``/*``
    :param account_id: Account id of the source bucket
    :param log_prefix: Key prefix logs are written under. A trailing slash is dropped.
    :return: PolicyStatement
    """
    kind = StatementKind.ALLOW_LOGGING_SERVICE
    _check_bucket_arn(kind, bucket_arn)

    prefix = log_prefix[:-1] if log_prefix.endswith("/") else log_prefix

    return PolicyStatement(
        sid=kind.value,
        effect=Effect.ALLOW,
        actions=["s3:PutObject"],
        principals=[Principal(type="Service", identifiers=[LOGGING_SERVICE_PRINCIPAL])],
        resources=[f"{bucket_arn}{prefix}/*"],
        conditions=[
            Condition(test="ArnLike", variable="aws:SourceArn", values=[bucket_arn]),
            Condition(test="StringEquals", variable="aws:SourceAccount", values=[account_id]),
        ],
    )


STATEMENT_BUILDERS: dict[StatementKind, Callable[..., PolicyStatement]] = {
    StatementKind.ALLOW_PUBLIC_GET_OBJECT: create_allow_public_get_object_statement,
    StatementKind.FORCE_TLS_REQUESTS_ONLY: create_force_tls_requests_only_statement,
    StatementKind.ENFORCE_TLSV12_OR_HIGHER: create_enforce_tlsv12_or_higher_statement,
    StatementKind.DENY_INCORRECT_ENCRYPTION_HEADER: create_deny_incorrect_encryption_header_statement,
    StatementKind.DENY_UNENCRYPTED_OBJECT_UPLOADS: create_deny_unencrypted_object_uploads_statement,
    StatementKind.DENY_BUCKET_KEYLESS_UPLOADS: create_deny_bucket_keyless_uploads_statement,
    StatementKind.ALLOW_LOGGING_SERVICE: create_allow_logging_service_statement,
}


def create_statement(kind: Union[StatementKind, str], bucket_arn: str, *args, **kwargs) -> PolicyStatement:
    """
    Build a statement by its kind (or ``Sid``)

    Example::

        create_statement("DenyIncorrectEncryptionHeader", bucket_arn, SSEAlgorithm.KMS)

    :param kind: A StatementKind or its value
    :param bucket_arn: ARN of the bucket
    :param args: Builder specific arguments
    :param kwargs: Builder specific keyword arguments
    :return: PolicyStatement
    """
    return STATEMENT_BUILDERS[StatementKind(kind)](bucket_arn, *args, **kwargs)


def create_private_bucket_statements(
    bucket_arn: str,
    sse_algorithm: Union[SSEAlgorithm, str] = SSEAlgorithm.AES,
    bucket_key_enabled: Optional[bool] = None,
) -> list[PolicyStatement]:
    """
    Statements enforcing TLS and server-side encryption on a private bucket

    The bucket key statement is only added for KMS encryption, with the bucket key enabled (the default for KMS).

    :param bucket_arn: ARN of the bucket
    :param sse_algorithm: Server-side encryption algorithm objects must be uploaded with
    :param bucket_key_enabled: Deny uploads without a bucket key. Defaults to true for KMS.
    :return: list of PolicyStatement
    """
    sse_algorithm = SSEAlgorithm(sse_algorithm)
    if bucket_key_enabled is None:
        bucket_key_enabled = sse_algorithm == SSEAlgorithm.KMS

    statements = [
        create_force_tls_requests_only_statement(bucket_arn),
        create_enforce_tlsv12_or_higher_statement(bucket_arn),
        create_deny_incorrect_encryption_header_statement(bucket_arn, sse_algorithm),
        create_deny_unencrypted_object_uploads_statement(bucket_arn),
    ]

    if sse_algorithm == SSEAlgorithm.KMS and bucket_key_enabled:
        statements.append(create_deny_bucket_keyless_uploads_statement(bucket_arn))

    return statements


def create_public_bucket_statements(bucket_arn: str, force_tls: bool = False) -> list[PolicyStatement]:
    statements = [create_allow_public_get_object_statement(bucket_arn)]

    if force_tls:
        statements.extend(
            [
                create_force_tls_requests_only_statement(bucket_arn),
                create_enforce_tlsv12_or_higher_statement(bucket_arn),
            ]
        )

    return statements
