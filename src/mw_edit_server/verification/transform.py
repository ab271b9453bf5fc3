"""
Verification Transform

Pure, synchronous end-to-end rewrite of a submitted document:

1. exempt titles are returned unchanged;
2. documents that already carry verification markers are returned unchanged;
3. documents opening with a recognised template get ``status=proposed``
   injected and the remainder wrapped;
4. everything else is segmented and every new block is wrapped.

Fetching the prior revision is not done here; callers pass the resulting
``BaselineIndex`` in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import markers
from .baseline import BaselineIndex
from .namespaces import is_exempt_title
from .templates import detect_status_template, inject_status
from .wrapper import wrap_content


class VerificationOutcome(str, Enum):
    EXEMPT = "exempt"
    ALREADY_MARKED = "already_marked"
    APPLIED = "applied"


@dataclass(frozen=True)
class VerificationResult:
    source: str
    outcome: VerificationOutcome
    template: Optional[str] = None


def precheck(title: str, source: str) -> Optional[VerificationOutcome]:
    """
    Return the short-circuit outcome for an edit, or None if the document
    needs rewriting.
    """
    if is_exempt_title(title):
        return VerificationOutcome.EXEMPT
    if markers.has_verification_markers(source):
        return VerificationOutcome.ALREADY_MARKED
    return None


def verify_source(
    title: str,
    source: str,
    baseline: Optional[BaselineIndex] = None,
    attribution: str = markers.DEFAULT_ATTRIBUTION,
) -> VerificationResult:
    """
    Rewrite ``source`` so that new claims are flagged as proposed.

    Parameters
    ----------
    title : str
        Page title, used for the namespace exemption.

    source : str
        Submitted wikitext.

    baseline : Optional[BaselineIndex]
        Index of the prior revision. None means everything is new.

    attribution : str
        Value of the provenance marker's attribution field.

    Returns
    -------
    VerificationResult
        The rewritten source and how it was arrived at.
    """
    outcome = precheck(title, source)
    if outcome is not None:
        return VerificationResult(source=source, outcome=outcome)

    template = detect_status_template(source)
    if template:
        rewritten = inject_status(source, baseline, attribution)
    else:
        rewritten = wrap_content(source, baseline, attribution)

    return VerificationResult(
        source=rewritten,
        outcome=VerificationOutcome.APPLIED,
        template=template,
    )
