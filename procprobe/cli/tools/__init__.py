from .base import Tool, ToolConfig, ToolContext
from .check_tool import CheckTool
from .kill_tool import KillTool
from .probe_tool import ProbeTool
from .signals_tool import SignalsTool

__all__ = [
    "Tool",
    "ToolConfig",
    "ToolContext",
    "CheckTool",
    "KillTool",
    "ProbeTool",
    "SignalsTool",
]
