"""
End-to-end tests of the verification transform.
"""

import pytest

from mw_edit_server.verification import (
    BaselineIndex,
    VerificationOutcome,
    verify_source,
)
from mw_edit_server.verification.markers import unwrap


DOCUMENTS = [
    "Local band played a show.",
    "{{Show\n|name=X\n}}\nThey opened with a cover.",
    "== History ==\nFormed in 2001.\nSplit in 2005.\n\n* [[Jane Doe]]\n* Bob on drums\n[[Category:Bands]]",
    "{|\n! Year\n|-\n| 2001\n|}\nA table above.",
    "* [[Jane Doe]]",
    "Claim with source. {{source|https://example.org}}",
    "",
]


def transform(source, title="Local Band", baseline=None):
    return verify_source(title, source, baseline=baseline).source


# ---------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------

def test_new_sentence_is_wrapped():
    result = verify_source("Local Band", "Local band played a show.")
    assert result.source == "{{Bot_proposes|Local band played a show.|by=bot}}"
    assert result.outcome == VerificationOutcome.APPLIED
    assert result.template is None


def test_recognized_template_gets_status():
    result = verify_source("Some Show", "{{Show\n|name=X\n}}")
    assert result.source == "{{Show\n|status=proposed\n|name=X\n}}"
    assert result.template == "Show"


def test_unchanged_line_passes_through_on_update():
    baseline = BaselineIndex.from_source("Local band played a show.")
    assert transform("Local band played a show.", baseline=baseline) == "Local band played a show."


def test_bare_link_list_item_is_not_wrapped():
    assert transform("* [[Jane Doe]]") == "* [[Jane Doe]]"


def test_talk_page_is_returned_verbatim():
    source = "I think this band is great.\n* really"
    result = verify_source("Talk:Foo", source)
    assert result.source == source
    assert result.outcome == VerificationOutcome.EXEMPT


# ---------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------

@pytest.mark.parametrize("source", DOCUMENTS)
def test_idempotent(source):
    once = transform(source)
    assert transform(once) == once


def test_already_marked_document_is_untouched():
    source = "{{Bot_proposes|Old.|by=bot}}\nBrand new claim."
    result = verify_source("Local Band", source)
    assert result.source == source
    assert result.outcome == VerificationOutcome.ALREADY_MARKED


@pytest.mark.parametrize("title", ["Talk:Foo", "User:Bob", "Template:Show", "Band talk:X"])
@pytest.mark.parametrize("source", DOCUMENTS)
def test_exempt_titles_are_untouched(title, source):
    assert transform(source, title=title) == source


def test_baseline_paragraph_is_preserved_and_new_one_wrapped():
    prior = "{{Bot_proposes|Old claim.|by=bot}}\n\nAccepted fact."
    baseline = BaselineIndex.from_source(prior)
    source = "Old claim.\n\nAccepted fact.\n\nNew claim."
    assert transform(source, baseline=baseline) == (
        "Old claim.\n\nAccepted fact.\n\n{{Bot_proposes|New claim.|by=bot}}"
    )


def test_rewrapped_paragraph_matches_baseline():
    baseline = BaselineIndex.from_source("They toured\nall of Europe.")
    assert transform("They toured all\nof Europe.", baseline=baseline) == "They toured all of Europe."


def test_new_paragraph_unwraps_to_original():
    source = "Tickets cost $10 | cash=only"
    assert unwrap(transform(source)) == source


def test_structural_lines_are_byte_identical():
    structural = [
        "== History ==",
        "[[Category:Bands]]",
        "{|",
        "! Year",
        "|-",
        "| 2001",
        "|}",
    ]
    source = "\n".join(structural[:2] + ["A claim."] + structural[2:])
    out_lines = transform(source).split("\n")
    for line in structural:
        assert line in out_lines


def test_never_raises_on_malformed_markup():
    source = "{{Show\n|name={{Broken\nText after"
    result = verify_source("Local Band", source)
    assert result.source.startswith("{{Show\n|status=proposed\n")
    assert "Bot_proposes" not in result.source


def test_multiline_citation_stays_inside_wrapper():
    source = "They played at the hall.<ref>{{cite web\n|url=http://x\n|title=Y}}</ref> It sold out."
    out = transform(source)
    assert out == (
        "{{Bot_proposes|They played at the hall.<ref>{{cite web {{!}}url{{=}}http://x "
        "{{!}}title{{=}}Y}}</ref> It sold out.|by=bot}}"
    )
    assert unwrap(out) == "They played at the hall.<ref>{{cite web |url=http://x |title=Y}}</ref> It sold out."


def test_nested_status_does_not_replace_outer_flag():
    result = verify_source("Some Show", "{{Show\n|headliner={{Artist card|name=A|status=confirmed}}\n|name=X\n}}")
    assert result.source.startswith("{{Show\n|status=proposed\n")
    assert "status=confirmed" in result.source
