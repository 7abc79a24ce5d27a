"""Generation tools backed by MCP tools.

A GenerationTool pairs a remote tool with the generation schema of its
arguments, so a model can be constrained to produce valid calls, and turns
whatever the remote tool returns into text the model can read.
"""

import json
import logging
from functools import cached_property
from typing import Any

from schema_bridge.schema import GenerationSchema, convert_schema, to_json_schema
from schema_bridge.tools.types import ToolDescriptor, ToolInvoker, get_value

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 50


def _format_chunk(chunk: Any) -> str:
    chunk_type = get_value(chunk, "type", "text")

    if chunk_type == "text":
        return get_value(chunk, "text", "")

    if chunk_type in ("image", "audio"):
        label = chunk_type.capitalize()
        mime_type = get_value(chunk, "mimeType", "")
        data = str(get_value(chunk, "data", ""))
        return f"[{label}: {mime_type}, {data[:PREVIEW_LENGTH]}...]"

    if chunk_type == "resource":
        resource = get_value(chunk, "resource", {})
        uri = get_value(resource, "uri", "")
        mime_type = get_value(resource, "mimeType", "")
        formatted = f"[Resource: {uri}, {mime_type}]"
        text = get_value(resource, "text")
        if text:
            formatted += f" {text[:PREVIEW_LENGTH]}..."
        return formatted

    if chunk_type == "resource_link":
        uri = get_value(chunk, "uri", "")
        mime_type = get_value(chunk, "mimeType", "")
        return f"[Resource: {uri}, {mime_type}]"

    logger.debug(f"Unknown content chunk type: {chunk_type}")
    return ""


def format_content(chunks: list[Any]) -> str:
    """Flatten MCP content chunks into a single display string.

    Text is kept verbatim; binary and resource chunks are summarised with a
    short preview of their payload.

    Args:
        chunks: Content chunks as MCP content objects or dicts

    Returns:
        str: The concatenated text
    """
    return "".join(_format_chunk(chunk) for chunk in chunks)


class GenerationTool:
    """An MCP tool exposed to a language model.

    Attributes:
        descriptor: The remote tool definition
        invoker: The client used to execute the tool
    """

    def __init__(self, descriptor: ToolDescriptor, invoker: ToolInvoker) -> None:
        self.descriptor = descriptor
        self.invoker = invoker

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def description(self) -> str:
        return self.descriptor.description

    @cached_property
    def parameters(self) -> GenerationSchema:
        """Generation schema of the tool arguments, converted once."""
        schema = convert_schema(self.descriptor.input_schema, name=self.name)
        logger.debug(f"Converted parameter schema for tool {self.name}")
        return schema

    def to_ollama_tool(self) -> dict[str, Any]:
        """Get the tool definition in Ollama's ``tools`` format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": to_json_schema(self.parameters),
            },
        }

    async def call(self, arguments: dict[str, Any] | str) -> str:
        """Invoke the tool and format its result for the model.

        Failures are reported as text instead of raised, since the result is
        fed back to the model either way.

        Args:
            arguments: Tool arguments as a dict or a JSON object string

        Returns:
            str: The formatted tool output or an error message
        """
        if isinstance(arguments, str):
            try:
                parsed = json.loads(arguments)
            except json.JSONDecodeError as e:
                message = (
                    f"Error calling MCP tool '{self.name}': {e}. "
                    f"Invalid JSON: {arguments}"
                )
                logger.warning(message)
                return message
            if not isinstance(parsed, dict):
                logger.warning(f"Received non-object arguments for {self.name}: {arguments}")
                return "Error: JSON root is not a dictionary, or is not valid JSON."
            arguments = parsed

        logger.info(f"Calling MCP tool '{self.name}' with arguments: {arguments}")

        try:
            result = await self.invoker.call_tool(self.name, arguments)
        except Exception as e:
            message = f"Error calling MCP tool '{self.name}': {e}"
            logger.error(message)
            return message

        text = format_content(result.content)
        if result.is_error:
            logger.warning(f"MCP tool '{self.name}' reported an error: {text}")
            return f"MCP tool '{self.name}' failed: {text}"

        logger.debug(f"MCP tool '{self.name}' returned {len(text)} characters")
        return f"MCP tool '{self.name}' returned: {text}"
