"""Tool-calling chat service.

This module provides the ToolChatService, which runs a conversation with an
Ollama model that may call MCP tools. Every round sends the history together
with the tool definitions; tool calls are executed and their output appended
until the model answers in plain text.
"""

import logging
import re
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from schema_bridge.ollama import OllamaClient
from schema_bridge.tools import GenerationTool

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOOL_ROUNDS = 8
THINK_BLOCK = re.compile(r"<think>.*?</think>\n*", re.DOTALL)


class ToolLoopLimitError(RuntimeError):
    """Raised when the model keeps calling tools past the round limit."""


def strip_thinking(content: str) -> str:
    """Remove ``<think>...</think>`` blocks from model output."""
    return THINK_BLOCK.sub("", content)


@dataclass
class ChatEvent:
    """An event produced while running a conversation.

    Attributes:
        type: One of "tool_call", "tool_result" or "message"
        data: Event payload
    """

    type: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class ChatOutcome:
    """Final result of a conversation run."""

    content: str
    model: str
    tool_calls: list[dict[str, Any]] = field(default_factory=list)
    eval_count: int | None = None
    prompt_eval_count: int | None = None


class ToolChatService:
    """Runs chat conversations in which the model can call tools.

    Attributes:
        ollama_client: The Ollama client used for generation
        tools: Tools offered to the model, by name
        max_tool_rounds: Maximum number of tool-calling rounds per run
    """

    def __init__(
        self,
        ollama_client: OllamaClient,
        tools: list[GenerationTool],
        max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
    ) -> None:
        self.ollama_client = ollama_client
        self.tools = {tool.name: tool for tool in tools}
        self.max_tool_rounds = max_tool_rounds

    def tool_definitions(self) -> list[dict[str, Any]]:
        """Get the Ollama definitions of all registered tools."""
        return [tool.to_ollama_tool() for tool in self.tools.values()]

    @staticmethod
    def _parse_call(call: dict[str, Any]) -> tuple[str, Any]:
        function = call.get("function") or {}
        return function.get("name", ""), function.get("arguments") or {}

    async def _execute(self, name: str, arguments: Any) -> str:
        tool = self.tools.get(name)
        if tool is None:
            logger.warning(f"Model requested unknown tool: {name}")
            return f"Error: unknown tool '{name}'"

        return await tool.call(arguments)

    async def run_events(
        self,
        model: str,
        messages: list[dict[str, Any]],
        think: bool = False,
    ) -> AsyncIterator[ChatEvent]:
        """Run a conversation, yielding events as they happen.

        Args:
            model: The model name
            messages: Conversation history in Ollama format. The list is
                      not modified.
            think: Whether to request thinking from the model

        Yields:
            ChatEvent: tool_call and tool_result events for every tool
            execution, then a single message event with the final answer

        Raises:
            ToolLoopLimitError: If the model is still calling tools after
                                ``max_tool_rounds`` rounds
            Exception: If the Ollama API request fails
        """
        history = list(messages)
        definitions = self.tool_definitions()

        for round_number in range(self.max_tool_rounds + 1):
            response = await self.ollama_client.chat(
                model=model,
                messages=history,
                tools=definitions,
                think=think,
            )
            message = response.get("message") or {}
            tool_calls = message.get("tool_calls") or []

            if not tool_calls:
                content = strip_thinking(message.get("content") or "")
                logger.info(f"Model {model} answered after {round_number} tool rounds")
                yield ChatEvent(
                    type="message",
                    data={
                        "content": content,
                        "model": model,
                        "eval_count": response.get("eval_count"),
                        "prompt_eval_count": response.get("prompt_eval_count"),
                    },
                )
                return

            if round_number == self.max_tool_rounds:
                break

            history.append(
                {
                    "role": "assistant",
                    "content": message.get("content") or "",
                    "tool_calls": tool_calls,
                }
            )
            for call in tool_calls:
                name, arguments = self._parse_call(call)
                yield ChatEvent(type="tool_call", data={"name": name, "arguments": arguments})
                result = await self._execute(name, arguments)
                yield ChatEvent(type="tool_result", data={"name": name, "result": result})
                history.append({"role": "tool", "tool_name": name, "content": result})

        raise ToolLoopLimitError(
            f"Model {model} exceeded {self.max_tool_rounds} tool-calling rounds"
        )

    async def run(
        self,
        model: str,
        messages: list[dict[str, Any]],
        think: bool = False,
    ) -> ChatOutcome:
        """Run a conversation and collect its outcome.

        Raises:
            ToolLoopLimitError: If the round limit is exceeded
            Exception: If the Ollama API request fails
        """
        tool_calls: list[dict[str, Any]] = []
        pending: dict[str, Any] = {}

        async for event in self.run_events(model, messages, think=think):
            if event.type == "tool_call":
                pending = dict(event.data)
            elif event.type == "tool_result":
                tool_calls.append({**pending, "result": event.data["result"]})
                pending = {}
            elif event.type == "message":
                return ChatOutcome(
                    content=event.data["content"],
                    model=model,
                    tool_calls=tool_calls,
                    eval_count=event.data.get("eval_count"),
                    prompt_eval_count=event.data.get("prompt_eval_count"),
                )

        raise RuntimeError("Conversation ended without a final message")
