"""
Mansahay RAG - Chat Module
"""

from mansahay_rag.chat.tools import (
    ToolCall,
    ToolDispatcher,
    Doctor,
    Track,
    VaultResource,
    parse_tool_call,
)

__all__ = [
    "ToolCall",
    "ToolDispatcher",
    "Doctor",
    "Track",
    "VaultResource",
    "parse_tool_call",
]
