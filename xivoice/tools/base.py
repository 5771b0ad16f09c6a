from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, NoReturn

from fastmcp.exceptions import ToolError

from xivoice.shared.exceptions import XiException
from xivoice.shared.hints import format_hints
from xivoice.shared.requests import XiClient, get_client

if TYPE_CHECKING:
    from fastmcp import FastMCP
    from fastmcp.tools import FunctionTool
    from mcp.types import ContentBlock

logger = logging.getLogger(__name__)


class BaseTool(ABC):
    """
    Base helper class for all xivoice MCP tools.

    USAGE:
    All tools inherit from this class and implement an async ``__call__`` whose
    annotated signature becomes the tool's input schema. Tools are registered
    with FastMCP through ``.mcp`` (or ``register``).

    FORMAT:
    Tools return a list[ContentBlock] describing what they did. Failures are
    raised as ``fastmcp.exceptions.ToolError`` so the client receives a text
    result flagged with ``isError``.

    Subclasses may set ``name``, ``title`` and ``description`` class attributes as defaults.
    """

    name: str | None = None
    title: str | None = None
    description: str | None = None

    def __init__(
        self,
        env: XiClient | None = None,
        name: str | None = None,
        title: str | None = None,
        description: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the tool.

        Args:
            env: The XiClient the tool talks to. When omitted, the process-wide
                client from ``get_client()`` is used at call time.
            name: Tool name for MCP registration (auto-generated from class name if not provided)
            title: Human-readable display name for the tool (auto-generated from class name)
            description: Tool description (auto-generated from docstring if not provided)
            meta: Metadata to include in MCP tool listing
        """
        self.env = env
        cls = type(self)
        self.name = name or cls.name or cls.__name__.lower().replace("tool", "")
        self.title = title or cls.title or cls.__name__.replace("Tool", "").replace("_", " ").title()
        self.description = (
            description
            or cls.description
            or (inspect.cleandoc(self.__doc__) if self.__doc__ else None)
        )
        self.meta = meta

        # Expose attributes FastMCP expects when registering an instance directly
        self.__name__ = self.name  # FastMCP uses fn.__name__ if name param omitted
        if self.description:
            self.__doc__ = self.description

    @property
    def client(self) -> XiClient:
        """The injected client, or the lazily built process-wide one."""
        if self.env is not None:
            return self.env
        return get_client()

    @abstractmethod
    async def __call__(self, **kwargs: Any) -> list[ContentBlock]:
        """Execute the tool.

        Args:
            **kwargs: Tool-specific arguments

        Returns:
            List of ContentBlock with the tool's output
        """
        raise NotImplementedError("Subclasses must implement __call__")

    def register(self, server: FastMCP) -> BaseTool:
        """Register this tool on a FastMCP server and return self for chaining."""
        server.add_tool(self.mcp)
        return self

    @property
    def mcp(self) -> FunctionTool:
        """Get this tool as a FastMCP FunctionTool (cached).

        This allows clean registration:
            server.add_tool(my_tool.mcp)
        """
        if not hasattr(self, "_mcp_tool"):
            from fastmcp.tools import FunctionTool

            self._mcp_tool = FunctionTool.from_function(
                self,
                name=self.name,
                title=self.title,
                description=self.description,
                meta=self.meta,
            )
        return self._mcp_tool

    def fail(self, action: str, error: Exception) -> NoReturn:
        """Raise a ToolError describing ``error``, with any hints it carries."""
        message = f"Error {action}: {error}"
        if isinstance(error, XiException) and error.hints:
            message = f"{message}\n\n{format_hints(error.hints)}"
        logger.error("%s failed: %s", self.name, error)
        raise ToolError(message) from error
