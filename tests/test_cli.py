import json

import pytest
from click.testing import CliRunner

from cds_constructs.lib.cli.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestParseArn:
    def test_sections(self, runner):
        result = runner.invoke(cli, ["parse-arn", "arn:aws:rds:eu-west-1:123456789012:db:mysql-db"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Partition: aws",
            "Service: rds",
            "Region: eu-west-1",
            "Account ID: 123456789012",
            "Resource: db:mysql-db",
        ]

    def test_invalid(self, runner):
        result = runner.invoke(cli, ["parse-arn", "aws:s3:::bucket"])

        assert result.exit_code == 1
        assert "Invalid ARN: Prefix is missing." in result.output


class TestCheckBucketName:
    def test_valid(self, runner):
        result = runner.invoke(cli, ["check-bucket-name", "acme-uploads", "acme.docs"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["acme-uploads: valid", "acme.docs: valid"]

    def test_invalid(self, runner):
        result = runner.invoke(cli, ["check-bucket-name", "acme-uploads", "Acme_Uploads"])

        assert result.exit_code == 1
        assert "Acme_Uploads: invalid" in result.output

    def test_requires_a_name(self, runner):
        result = runner.invoke(cli, ["check-bucket-name"])

        assert result.exit_code == 2


class TestBucketPolicy:
    def test_private(self, runner):
        result = runner.invoke(cli, ["bucket-policy", "arn:aws:s3:::acme-uploads", "--sse", "aws:kms"])

        assert result.exit_code == 0
        document = json.loads(result.output)
        assert document["Version"] == "2012-10-17"
        assert [statement["Sid"] for statement in document["Statement"]] == [
            "ForceTLSRequestsOnly",
            "EnforceTLSv12OrHigher",
            "DenyIncorrectEncryptionHeader",
            "DenyUnencryptedObjectUploads",
            "DenyBucketKeylessUploads",
        ]

    def test_private_without_bucket_key(self, runner):
        result = runner.invoke(
            cli, ["bucket-policy", "arn:aws:s3:::acme-uploads", "--sse", "aws:kms", "--no-bucket-key"]
        )

        assert result.exit_code == 0
        assert "DenyBucketKeylessUploads" not in result.output

    def test_public(self, runner):
        result = runner.invoke(cli, ["bucket-policy", "arn:aws:s3:::acme-assets", "--public", "--force-tls"])

        assert result.exit_code == 0
        assert [statement["Sid"] for statement in json.loads(result.output)["Statement"]] == [
            "AllowPublicGetObject",
            "ForceTLSRequestsOnly",
            "EnforceTLSv12OrHigher",
        ]

    def test_invalid_arn(self, runner):
        result = runner.invoke(cli, ["bucket-policy", "arn:aws:s3:::acme-assets/*", "--public"])

        assert result.exit_code == 1
        assert "AllowPublicGetObject ARN must not end with a slash wildcard" in result.output

    def test_unknown_algorithm(self, runner):
        result = runner.invoke(cli, ["bucket-policy", "arn:aws:s3:::acme-uploads", "--sse", "des"])

        assert result.exit_code == 2


def test_debug(runner):
    result = runner.invoke(cli, ["--debug", "check-bucket-name", "acme-uploads"])

    assert result.exit_code == 0
    assert result.output.startswith("Enabled debug mode!")
