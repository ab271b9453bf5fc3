import pytest
from unittest.mock import AsyncMock

from mw_edit_server.middleware import (
    ADVISORY_NOTE,
    ContentBlock,
    EditContext,
    Middleware,
    MiddlewarePipeline,
    ToolResult,
    VerificationMiddleware,
)
from mw_edit_server.wiki.api_client import MediaWikiRequestError


def update_context(source, title="Local Band", latest_id=42):
    return EditContext(tool="update-page", title=title, source=source, latest_id=latest_id)


def create_context(source, title="Local Band"):
    return EditContext(tool="create-page", title=title, source=source)


# ---------------------------------------------------------------------
# Pipeline ordering
# ---------------------------------------------------------------------

class Recorder(Middleware):
    def __init__(self, name, calls):
        self.name = name
        self.calls = calls

    async def on_input(self, context):
        self.calls.append(("in", self.name))
        return context.model_copy(update={"source": context.source + self.name})

    async def on_output(self, context, result):
        self.calls.append(("out", self.name))
        return result


@pytest.mark.asyncio
async def test_pipeline_runs_as_onion():
    calls = []
    pipeline = MiddlewarePipeline()
    pipeline.register(Recorder("a", calls))
    pipeline.register(Recorder("b", calls))

    seen = {}

    async def handler(context):
        calls.append(("handler", context.source))
        seen["source"] = context.source
        return ToolResult(content=[ContentBlock(text="ok")])

    result = await pipeline.wrap_handler(create_context(""), handler)

    assert calls == [
        ("in", "a"),
        ("in", "b"),
        ("handler", "ab"),
        ("out", "b"),
        ("out", "a"),
    ]
    assert seen["source"] == "ab"
    assert result.content[0].text == "ok"


@pytest.mark.asyncio
async def test_base_middleware_is_pass_through():
    middleware = Middleware()
    context = create_context("x")
    result = ToolResult()
    assert await middleware.on_input(context) is context
    assert await middleware.on_output(context, result) is result


# ---------------------------------------------------------------------
# Verification middleware
# ---------------------------------------------------------------------

@pytest.fixture
def revisions():
    mock = AsyncMock()
    mock.get_revision_wikitext.return_value = "Old claim."
    return mock


@pytest.mark.asyncio
async def test_update_uses_base_revision(revisions):
    middleware = VerificationMiddleware(revisions)
    context = await middleware.on_input(update_context("Old claim.\n\nNew claim."))

    revisions.get_revision_wikitext.assert_awaited_once_with(42)
    assert context.source == "Old claim.\n\n{{Bot_proposes|New claim.|by=bot}}"


@pytest.mark.asyncio
async def test_failed_fetch_treats_everything_as_new(revisions):
    revisions.get_revision_wikitext.side_effect = MediaWikiRequestError("boom")
    middleware = VerificationMiddleware(revisions)

    context = await middleware.on_input(update_context("Old claim.\n\nNew claim."))

    assert context.source == (
        "{{Bot_proposes|Old claim.|by=bot}}\n\n{{Bot_proposes|New claim.|by=bot}}"
    )


@pytest.mark.asyncio
async def test_missing_revision_treats_everything_as_new(revisions):
    revisions.get_revision_wikitext.return_value = None
    middleware = VerificationMiddleware(revisions)

    context = await middleware.on_input(update_context("Old claim."))

    assert context.source == "{{Bot_proposes|Old claim.|by=bot}}"


@pytest.mark.asyncio
async def test_create_does_not_fetch(revisions):
    middleware = VerificationMiddleware(revisions, attribution="EditBot")
    context = await middleware.on_input(create_context("Old claim."))

    revisions.get_revision_wikitext.assert_not_awaited()
    assert context.source == "{{Bot_proposes|Old claim.|by=EditBot}}"


@pytest.mark.asyncio
async def test_exempt_title_is_untouched_and_not_fetched(revisions):
    middleware = VerificationMiddleware(revisions)
    original = update_context("Opinion.", title="Talk:Local Band")

    context = await middleware.on_input(original)

    assert context is original
    revisions.get_revision_wikitext.assert_not_awaited()


@pytest.mark.asyncio
async def test_already_marked_is_untouched(revisions):
    middleware = VerificationMiddleware(revisions)
    original = update_context("{{Show\n|status=proposed\n}}")

    context = await middleware.on_input(original)

    assert context is original
    revisions.get_revision_wikitext.assert_not_awaited()


@pytest.mark.asyncio
async def test_output_gets_advisory_note(revisions):
    middleware = VerificationMiddleware(revisions)
    result = ToolResult(content=[ContentBlock(text="Page updated")])

    annotated = await middleware.on_output(update_context("x"), result)

    assert [b.type for b in annotated.content] == ["text", "note"]
    assert annotated.content[-1].text == ADVISORY_NOTE
    assert len(result.content) == 1


@pytest.mark.asyncio
async def test_output_note_skipped_for_errors_and_exempt_titles(revisions):
    middleware = VerificationMiddleware(revisions)
    failed = ToolResult.error("Failed to update page: conflict")
    ok = ToolResult(content=[ContentBlock(text="Page updated")])

    assert await middleware.on_output(update_context("x"), failed) is failed
    assert await middleware.on_output(update_context("x", title="Talk:X"), ok) is ok
