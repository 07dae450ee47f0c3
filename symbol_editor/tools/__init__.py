"""Tool registration and discovery utilities."""

from .basetool import BaseTool, ToolMode
from .registry import ToolRegistry

# Global registry instance used throughout the application
registry = ToolRegistry()
registry.load_builtin_tools()


def get_tool(mode):
    return registry.get_tool(mode)


def get_tools():
    return registry.get_tools()

__all__ = ["BaseTool", "ToolMode", "ToolRegistry", "registry", "get_tool", "get_tools"]
