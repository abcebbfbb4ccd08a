from .s3 import (
    LOGGING_SERVICE_PRINCIPAL,
    SSEAlgorithm,
    STATEMENT_BUILDERS,
    StatementArgumentError,
    StatementKind,
    create_allow_logging_service_statement,
    create_allow_public_get_object_statement,
    create_deny_bucket_keyless_uploads_statement,
    create_deny_incorrect_encryption_header_statement,
    create_deny_unencrypted_object_uploads_statement,
    create_enforce_tlsv12_or_higher_statement,
    create_force_tls_requests_only_statement,
    create_private_bucket_statements,
    create_public_bucket_statements,
    create_statement,
)
