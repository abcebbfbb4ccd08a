import pytest

from cds_constructs.lib.iam import (
    Condition,
    Effect,
    Principal,
    S3StatementOptions,
    SSEAlgorithm,
    StatementArgumentError,
    StatementKind,
    create_private_bucket_statements,
    create_public_bucket_statements,
    create_statement,
)
from cds_constructs.lib.iam.statements import (
    LOGGING_SERVICE_PRINCIPAL,
    STATEMENT_BUILDERS,
    create_allow_logging_service_statement,
    create_allow_public_get_object_statement,
    create_deny_bucket_keyless_uploads_statement,
    create_deny_incorrect_encryption_header_statement,
    create_deny_unencrypted_object_uploads_statement,
    create_enforce_tlsv12_or_higher_statement,
    create_force_tls_requests_only_statement,
)

ANYONE = [Principal(type="AWS", identifiers=["*"])]


def test_allow_public_get_object(bucket_arn):
    statement = create_allow_public_get_object_statement(bucket_arn)

    assert statement.sid == "AllowPublicGetObject"
    assert statement.effect == Effect.ALLOW
    assert statement.actions == ["s3:GetObject"]
    assert statement.principals == ANYONE
    assert statement.resources == ["arn:aws:s3:::bucket/*"]
    assert statement.conditions == []


def test_force_tls_requests_only(bucket_arn):
    statement = create_force_tls_requests_only_statement(bucket_arn)

    assert statement.sid == "ForceTLSRequestsOnly"
    assert statement.effect == Effect.DENY
    assert statement.actions == ["s3:*"]
    assert statement.principals == ANYONE
    assert statement.resources == ["arn:aws:s3:::bucket", "arn:aws:s3:::bucket/*"]
    assert statement.conditions == [Condition(test="Bool", variable="aws:SecureTransport", values=["false"])]


def test_enforce_tlsv12_or_higher(bucket_arn):
    statement = create_enforce_tlsv12_or_higher_statement(bucket_arn)

    assert statement.sid == "EnforceTLSv12OrHigher"
    assert statement.effect == Effect.DENY
    assert statement.actions == ["s3:*"]
    assert statement.resources == ["arn:aws:s3:::bucket", "arn:aws:s3:::bucket/*"]
    assert statement.conditions == [Condition(test="NumericLessThan", variable="s3:TlsVersion", values=["1.2"])]


@pytest.mark.parametrize("sse_algorithm,expected", [(SSEAlgorithm.AES, "AES256"), ("aws:kms", "aws:kms")])
def test_deny_incorrect_encryption_header(bucket_arn, sse_algorithm, expected):
    statement = create_deny_incorrect_encryption_header_statement(bucket_arn, sse_algorithm)

    assert statement.sid == "DenyIncorrectEncryptionHeader"
    assert statement.effect == Effect.DENY
    assert statement.actions == ["s3:PutObject"]
    assert statement.resources == ["arn:aws:s3:::bucket/*"]
    assert statement.conditions == [
        Condition(test="StringNotEquals", variable="s3:x-amz-server-side-encryption", values=[expected])
    ]


def test_deny_incorrect_encryption_header_unknown_algorithm(bucket_arn):
    with pytest.raises(ValueError):
        create_deny_incorrect_encryption_header_statement(bucket_arn, "aws:kms:dsse")


def test_deny_unencrypted_object_uploads(bucket_arn):
    statement = create_deny_unencrypted_object_uploads_statement(bucket_arn)

    assert statement.sid == "DenyUnencryptedObjectUploads"
    assert statement.resources == ["arn:aws:s3:::bucket/*"]
    assert statement.conditions == [
        Condition(test="Null", variable="s3:x-amz-server-side-encryption", values=["true"])
    ]


def test_deny_bucket_keyless_uploads(bucket_arn):
    statement = create_deny_bucket_keyless_uploads_statement(bucket_arn)

    assert statement.sid == "DenyBucketKeylessUploads"
    assert statement.resources == ["arn:aws:s3:::bucket/*"]
    assert statement.conditions == [
        Condition(test="Null", variable="s3:x-amz-server-side-encryption-bucket-key-enabled", values=["true"])
    ]


class TestAllowLoggingService:
    def test_statement(self, bucket_arn):
        statement = create_allow_logging_service_statement(bucket_arn, "123456789012", "/logs/")

        assert statement.sid == "AllowLoggingService"
        assert statement.effect == Effect.ALLOW
        assert statement.actions == ["s3:PutObject"]
        assert statement.principals == [Principal(type="Service", identifiers=[LOGGING_SERVICE_PRINCIPAL])]
        assert statement.resources == ["arn:aws:s3:::bucket/logs/*"]
        assert statement.conditions == [
            Condition(test="ArnLike", variable="aws:SourceArn", values=[bucket_arn]),
            Condition(test="StringEquals", variable="aws:SourceAccount", values=["123456789012"]),
        ]

    def test_prefix_without_trailing_slash(self, bucket_arn):
        statement = create_allow_logging_service_statement(bucket_arn, "123456789012", "/logs")

        assert statement.resources == ["arn:aws:s3:::bucket/logs/*"]

    def test_invalid_arn(self):
        with pytest.raises(StatementArgumentError, match="AllowLoggingService requires an ARN for a S3 bucket"):
            create_allow_logging_service_statement("arn:aws:iam::123456789012:user/User", "123456789012", "/logs")

    def test_non_arn(self):
        with pytest.raises(StatementArgumentError) as e:
            create_allow_logging_service_statement("bucket", "123456789012", "/logs")

        assert str(e.value) == "AllowLoggingService requires an ARN for a S3 bucket resource."

    def test_object_wildcard(self):
        with pytest.raises(StatementArgumentError) as e:
            create_allow_logging_service_statement("arn:aws:s3:::bucket/*", "123456789012", "/logs")

        assert str(e.value) == "AllowLoggingService ARN must not end with a slash wildcard (`/*`)."


@pytest.mark.parametrize("kind", [kind for kind in StatementKind if kind != StatementKind.ALLOW_LOGGING_SERVICE])
class TestArnChecks:
    def _build(self, kind, bucket_arn, **kwargs):
        if kind == StatementKind.DENY_INCORRECT_ENCRYPTION_HEADER:
            return create_statement(kind, bucket_arn, SSEAlgorithm.AES, **kwargs)
        return create_statement(kind, bucket_arn, **kwargs)

    def test_rejects_non_s3_arn(self, kind):
        with pytest.raises(StatementArgumentError) as e:
            self._build(kind, "arn:aws:sqs:us-west-2:123456789012:queue")

        assert str(e.value) == f"{kind.value} requires an ARN for a S3 bucket resource."

    def test_rejects_non_arn(self, kind):
        with pytest.raises(StatementArgumentError):
            self._build(kind, "bucket")

    def test_rejects_object_wildcard(self, kind):
        with pytest.raises(StatementArgumentError) as e:
            self._build(kind, "arn:aws:s3:::bucket/*")

        assert str(e.value) == f"{kind.value} ARN must not end with a slash wildcard (`/*`)."

    def test_principal_override(self, kind, bucket_arn):
        principals = [Principal(type="AWS", identifiers=["arn:aws:iam::123456789012:root"])]

        statement = self._build(kind, bucket_arn, options=S3StatementOptions(principals=principals))

        assert statement.principals == principals

    def test_empty_principal_override(self, kind, bucket_arn):
        statement = self._build(kind, bucket_arn, options=S3StatementOptions(principals=[]))

        assert statement.principals == []

    def test_default_principal(self, kind, bucket_arn):
        statement = self._build(kind, bucket_arn, options=S3StatementOptions())

        assert statement.principals == ANYONE


def test_statement_error_is_value_error():
    assert issubclass(StatementArgumentError, ValueError)


def test_statement_builders_cover_every_kind():
    assert set(STATEMENT_BUILDERS) == set(StatementKind)


def test_create_statement_by_sid(bucket_arn):
    statement = create_statement("DenyIncorrectEncryptionHeader", bucket_arn, SSEAlgorithm.KMS)

    assert statement.sid == StatementKind.DENY_INCORRECT_ENCRYPTION_HEADER.value
    assert statement.conditions[0].values == ["aws:kms"]


def test_create_statement_unknown_kind(bucket_arn):
    with pytest.raises(ValueError):
        create_statement("AllowEverything", bucket_arn)


class TestPrivateBucketStatements:
    def test_aes(self, bucket_arn):
        statements = create_private_bucket_statements(bucket_arn)

        assert [statement.sid for statement in statements] == [
            "ForceTLSRequestsOnly",
            "EnforceTLSv12OrHigher",
            "DenyIncorrectEncryptionHeader",
            "DenyUnencryptedObjectUploads",
        ]
        assert statements[2].conditions[0].values == ["AES256"]

    def test_kms_adds_bucket_key_statement(self, bucket_arn):
        statements = create_private_bucket_statements(bucket_arn, SSEAlgorithm.KMS)

        assert statements[-1].sid == "DenyBucketKeylessUploads"
        assert statements[2].conditions[0].values == ["aws:kms"]

    def test_kms_without_bucket_key(self, bucket_arn):
        statements = create_private_bucket_statements(bucket_arn, "aws:kms", bucket_key_enabled=False)

        assert "DenyBucketKeylessUploads" not in [statement.sid for statement in statements]

    def test_aes_ignores_bucket_key(self, bucket_arn):
        statements = create_private_bucket_statements(bucket_arn, SSEAlgorithm.AES, bucket_key_enabled=True)

        assert len(statements) == 4


class TestPublicBucketStatements:
    def test_default(self, bucket_arn):
        statements = create_public_bucket_statements(bucket_arn)

        assert [statement.sid for statement in statements] == ["AllowPublicGetObject"]

    def test_force_tls(self, bucket_arn):
        statements = create_public_bucket_statements(bucket_arn, force_tls=True)

        assert [statement.sid for statement in statements] == [
            "AllowPublicGetObject",
            "ForceTLSRequestsOnly",
            "EnforceTLSv12OrHigher",
        ]
