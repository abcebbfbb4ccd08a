from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Effect(str, Enum):
    ALLOW = "Allow"
    DENY = "Deny"


@dataclass(frozen=True)
class Principal:
    type: str
    """Principal type, ("AWS", "Service", "Federated", "CanonicalUser")"""

    identifiers: list[str]
    """Identifiers for this principal type, ("*", "logging.s3.amazonaws.com", account ARNs,...)"""


@dataclass(frozen=True)
class Condition:
    test: str
    """Condition operator, ("Bool", "StringEquals", "Null",...)"""

    variable: str
    """Context key the operator is applied to, ("aws:SecureTransport", "s3:TlsVersion",...)"""

    values: list[str]
    """Values the context key is compared to"""


@dataclass(frozen=True)
class PolicyStatement:
    sid: str
    """Statement id, unique within a policy document"""

    effect: Effect
    """Statement effect, (Effect.ALLOW, Effect.DENY)"""

    actions: list[str]
    """AWS actions, ("s3:GetObject", "s3:*",...)"""

    resources: list[str]
    """ARNs this statement applies to"""

    principals: list[Principal] = field(default_factory=list)
    """Principals this statement applies to"""

    conditions: list[Condition] = field(default_factory=list)
    """Conditions restricting when the effect applies. All of them must hold."""


@dataclass(frozen=True)
class S3StatementOptions:
    principals: Optional[list[Principal]] = None
    """
    Principals replacing the builder's default (``AWS: *``). The defaults are used when unset, an empty list
    is kept as-is.
    """
