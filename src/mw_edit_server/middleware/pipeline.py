"""
Edit Middleware Pipeline

Middlewares wrap the underlying edit call like layers of an onion:
``on_input`` hooks run in registration order before the wiki is called,
``on_output`` hooks run in reverse registration order after it answers.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List

from .models import EditContext, ToolResult

logger = logging.getLogger("mcp.middleware")


EditHandler = Callable[[EditContext], Awaitable[ToolResult]]


class Middleware:
    """
    Base class for edit middlewares. Both hooks default to pass-through.
    """

    name: str = "middleware"

    async def on_input(self, context: EditContext) -> EditContext:
        return context

    async def on_output(self, context: EditContext, result: ToolResult) -> ToolResult:
        return result


class MiddlewarePipeline:
    def __init__(self) -> None:
        self._middlewares: List[Middleware] = []

    @property
    def middlewares(self) -> List[Middleware]:
        return list(self._middlewares)

    def register(self, middleware: Middleware) -> None:
        self._middlewares.append(middleware)
        logger.info("Registered middleware: %s", middleware.name)

    async def process_input(self, context: EditContext) -> EditContext:
        current = context
        for middleware in self._middlewares:
            current = await middleware.on_input(current)
        return current

    async def process_output(self, context: EditContext, result: ToolResult) -> ToolResult:
        current = result
        for middleware in reversed(self._middlewares):
            current = await middleware.on_output(context, current)
        return current

    async def wrap_handler(self, context: EditContext, handler: EditHandler) -> ToolResult:
        """
        Run ``handler`` inside the pipeline.

        Output hooks see the context as transformed by the input hooks.
        """
        transformed = await self.process_input(context)
        result = await handler(transformed)
        return await self.process_output(transformed, result)
