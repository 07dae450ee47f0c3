from __future__ import annotations

import importlib
import os
from typing import Dict, List, Optional, Type

from .basetool import BaseTool, ToolMode


class ToolRegistry:
    """Registry for the path tools, keyed by :class:`ToolMode`."""

    def __init__(self) -> None:
        self._tools: Dict[ToolMode, BaseTool] = {}

    # ------------------------------------------------------------------
    def register_tool(self, tool_cls: Type[BaseTool]) -> None:
        """Register a :class:`BaseTool` subclass.

        Parameters
        ----------
        tool_cls:
            The tool class to register. It is instantiated once, tools keep
            no per-use state.
        """

        if not isinstance(tool_cls, type) or not issubclass(tool_cls, BaseTool):
            raise TypeError("tool_cls must be a subclass of BaseTool")
        if tool_cls is BaseTool:
            return
        if not getattr(tool_cls, "name", None) or tool_cls.mode is None:
            return
        # Avoid duplicates
        if tool_cls.mode in self._tools:
            return
        self._tools[tool_cls.mode] = tool_cls()

    # ------------------------------------------------------------------
    def get_tool(self, mode: ToolMode) -> BaseTool:
        return self._tools[mode]

    def get_tools(self) -> List[BaseTool]:
        """Return registered tools in :class:`ToolMode` order."""

        return [self._tools[mode] for mode in ToolMode if mode in self._tools]

    def tool_for_shortcut(self, text: str) -> Optional[BaseTool]:
        for tool in self._tools.values():
            if tool.shortcut and tool.shortcut == text:
                return tool
        return None

    # ------------------------------------------------------------------
    def load_builtin_tools(self) -> None:
        """Discover and register built-in tools located in this package."""

        tools_dir = os.path.dirname(__file__)
        for filename in sorted(os.listdir(tools_dir)):
            if not filename.endswith("tool.py"):
                continue
            if filename in {"basetool.py", "registry.py"}:
                continue
            module_name = f"{__package__}.{filename[:-3]}"
            module = importlib.import_module(module_name)
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, BaseTool)
                    and attr is not BaseTool
                    and getattr(attr, "name", None)
                ):
                    self.register_tool(attr)


__all__ = ["ToolRegistry"]
