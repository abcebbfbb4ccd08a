from .create_policy import create_bucket_policy
from .policy_document import generate_policy_document, render_statement
from .statements import (
    SSEAlgorithm,
    StatementArgumentError,
    StatementKind,
    create_private_bucket_statements,
    create_public_bucket_statements,
    create_statement,
)
from .types import Condition, Effect, PolicyStatement, Principal, S3StatementOptions
