import json
import logging
import sys

import click

from cds_constructs.lib.arn import ArnFormatError, parse_arn
from cds_constructs.lib.iam import (
    SSEAlgorithm,
    StatementArgumentError,
    create_private_bucket_statements,
    create_public_bucket_statements,
    generate_policy_document,
)
from cds_constructs.lib.validation import check_s3_bucket_name

logger = logging.getLogger(__name__)


def echo_key_value(key, value):
    click.echo(click.style(f"{key}: ", fg="green", bold=True) + str(value))


@click.group()
@click.option("--debug", is_flag=True, default=False, help="Enable DEBUG logging")
def cli(debug):
    logging.basicConfig(format="[%(asctime)s %(levelname)s %(name)s %(threadName)s]: %(message)s")

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        click.echo("Enabled debug mode!")


@cli.command("parse-arn")
@click.argument("arn")
def parse_arn_command(arn):
    """Print the sections of ARN"""
    try:
        parsed = parse_arn(arn)
    except ArnFormatError as e:
        raise click.ClickException(str(e))

    echo_key_value("Partition", parsed.partition)
    echo_key_value("Service", parsed.service)
    echo_key_value("Region", parsed.region)
    echo_key_value("Account ID", parsed.account_id)
    echo_key_value("Resource", parsed.resource)


@cli.command()
@click.argument("names", nargs=-1, required=True)
def check_bucket_name(names):
    """Check NAMES against the S3 bucket naming rules"""
    invalid = [name for name in names if not check_s3_bucket_name(name)]

    for name in names:
        echo_key_value(name, "invalid" if name in invalid else "valid")

    if invalid:
        logger.debug("invalid bucket names: %s", invalid)
        sys.exit(1)


@cli.command()
@click.argument("arn")
@click.option(
    "--sse",
    type=click.Choice([algorithm.value for algorithm in SSEAlgorithm]),
    default=SSEAlgorithm.AES.value,
    show_default=True,
    help="Server-side encryption algorithm of a private bucket",
)
@click.option("--bucket-key/--no-bucket-key", default=None, help="Deny uploads without a bucket key (KMS only)")
@click.option("--public", is_flag=True, help="Render the policy of a public bucket instead")
@click.option("--force-tls", is_flag=True, help="Deny requests not using TLS 1.2 or higher (public buckets)")
def bucket_policy(arn, sse, bucket_key, public, force_tls):
    """Print the bucket policy document the bucket constructs attach to ARN"""
    try:
        if public:
            statements = create_public_bucket_statements(arn, force_tls=force_tls)
        else:
            statements = create_private_bucket_statements(arn, sse, bucket_key)
    except StatementArgumentError as e:
        raise click.ClickException(str(e))

    click.echo(json.dumps(generate_policy_document(statements), indent=2))


def run():
    sys.exit(cli())


if __name__ == "__main__":
    run()
