"""
Verification Package

Content-governance transform applied to bot edits before they are committed:
new factual claims are flagged as proposed pending human review, while
accepted content, structural markup and exempt pages are left alone.
"""

from .baseline import BaselineIndex
from .namespaces import is_exempt_title
from .transform import (
    VerificationOutcome,
    VerificationResult,
    precheck,
    verify_source,
)

__all__ = [
    "BaselineIndex",
    "is_exempt_title",
    "VerificationOutcome",
    "VerificationResult",
    "precheck",
    "verify_source",
]
