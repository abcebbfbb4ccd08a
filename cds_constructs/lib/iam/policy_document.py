from typing import Iterable, Optional

from .types import PolicyStatement

POLICY_VERSION = "2012-10-17"


def render_statement(statement: PolicyStatement) -> dict:
    """
    Render a statement using the IAM JSON policy grammar

    Example:
        PolicyStatement(
            sid="ForceTLSRequestsOnly",
            effect=Effect.DENY,
            actions=["s3:*"],
            resources=["arn:aws:s3:::bucket", "arn:aws:s3:::bucket/*"],
            principals=[Principal("AWS", ["*"])],
            conditions=[Condition("Bool", "aws:SecureTransport", ["false"])],
        )
        becomes
        {
            "Sid": "ForceTLSRequestsOnly",
            "Effect": "Deny",
            "Action": ["s3:*"],
            "Resource": ["arn:aws:s3:::bucket", "arn:aws:s3:::bucket/*"],
            "Principal": {"AWS": ["*"]},
            "Condition": {"Bool": {"aws:SecureTransport": ["false"]}},
        }

    Conditions sharing an operator are grouped under it, and a repeated context key extends its values.

    :param statement: The statement to render
    :return: dict
    """
    rendered = {
        "Sid": statement.sid,
        "Effect": statement.effect.value,
        "Action": list(statement.actions),
        "Resource": list(statement.resources),
    }

    if statement.principals:
        principals = {}
        for principal in statement.principals:
            principals.setdefault(principal.type, []).extend(principal.identifiers)
        rendered["Principal"] = principals

    if statement.conditions:
        conditions = {}
        for condition in statement.conditions:
            conditions.setdefault(condition.test, {}).setdefault(condition.variable, []).extend(condition.values)
        rendered["Condition"] = conditions

    return rendered


def generate_policy_document(statements: Iterable[PolicyStatement], policy_id: Optional[str] = None) -> dict:
    """
    Generate a policy document from a list of statements

    :param statements: Statements to include, in order
    :param policy_id: Optional policy ``Id``
    :return: dict ready to be serialized to JSON
    """
    statements = list(statements)

    sids = [statement.sid for statement in statements]
    duplicates = sorted({sid for sid in sids if sids.count(sid) > 1})
    if duplicates:
        raise ValueError(f"statement ids must be unique within a policy document, found duplicates {duplicates}")

    document = {"Version": POLICY_VERSION}
    if policy_id:
        document["Id"] = policy_id
    document["Statement"] = [render_statement(statement) for statement in statements]

    return document
