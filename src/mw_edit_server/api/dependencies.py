from ..middleware import MiddlewarePipeline
from ..tools import edit_tools
from ..wiki.api_client import MediaWikiClient


def get_mw_client() -> MediaWikiClient:
    return edit_tools.mw_client


def get_edit_pipeline() -> MiddlewarePipeline:
    return edit_tools.pipeline
