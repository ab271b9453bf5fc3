from mw_edit_server.verification.baseline import BaselineIndex
from mw_edit_server.verification.markers import unwrap, wrap
from mw_edit_server.verification.wrapper import should_wrap, wrap_content


def test_should_wrap_skips():
    assert not should_wrap("")
    assert not should_wrap("   ")
    assert not should_wrap(wrap("Already wrapped."))
    assert not should_wrap("Claim. {{verified|by=Ann}}")
    assert not should_wrap("[[Jane Doe]]")
    assert should_wrap("Jane Doe sang.")


def test_should_wrap_respects_baseline():
    baseline = BaselineIndex.from_source("Jane Doe sang.")
    assert not should_wrap("Jane Doe sang.", baseline)
    assert should_wrap("Jane Doe sang twice.", baseline)


def test_paragraph_is_wrapped_and_collapsed():
    out = wrap_content("Line one\nline two")
    assert out == "{{Bot_proposes|Line one line two|by=bot}}"


def test_list_item_is_wrapped_behind_prefix():
    out = wrap_content("# Song one\n* [[Jane Doe]]")
    assert out == "# {{Bot_proposes|Song one|by=bot}}\n* [[Jane Doe]]"


def test_attribution_is_used():
    assert wrap_content("A claim.", attribution="EditBot") == "{{Bot_proposes|A claim.|by=EditBot}}"


def test_wrapped_text_round_trips():
    original = "Tickets were $10 | door=cash only."
    assert unwrap(wrap_content(original)) == original


def test_mixed_document():
    text = "\n".join([
        "== History ==",
        "Formed in 2001.",
        "",
        "* [[Jane Doe]]",
        "* Bob on drums",
        "[[Category:Bands]]",
    ])
    assert wrap_content(text) == "\n".join([
        "== History ==",
        "{{Bot_proposes|Formed in 2001.|by=bot}}",
        "",
        "* [[Jane Doe]]",
        "* {{Bot_proposes|Bob on drums|by=bot}}",
        "[[Category:Bands]]",
    ])
