"""Pydantic models for chat API requests and responses.

This module defines the request and response schemas for the chat endpoints,
including both streaming and non-streaming chat interactions.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single message of the conversation history."""

    role: str = Field(description="Message role (system, user, assistant or tool)")
    content: str = Field(default="", description="Message content")


class ChatRequest(BaseModel):
    """Request body for POST /api/v1/chat and POST /api/v1/chat/stream."""

    messages: list[ChatMessage] = Field(
        min_length=1,
        description="Conversation history, oldest first",
    )
    model: str | None = Field(
        default=None,
        description="Model to use. Defaults to the configured default model.",
    )
    think: bool = Field(
        default=False,
        description="Whether to request thinking/reasoning from the model (if supported).",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "messages": [
                        {"role": "user", "content": "What's the weather in Paris?"}
                    ],
                    "model": "llama3.2:latest",
                    "think": False,
                }
            ]
        }
    )


class ToolCallRecord(BaseModel):
    """A tool call executed while answering."""

    name: str = Field(description="Tool name")
    arguments: dict[str, Any] | str = Field(description="Arguments passed to the tool")
    result: str = Field(description="Formatted tool output")


class ChatResponse(BaseModel):
    """Response body for the non-streaming chat endpoint."""

    model: str = Field(description="Model that generated the answer")
    message: ChatMessage = Field(description="The assistant's final message")
    tool_calls_executed: list[ToolCallRecord] = Field(
        default_factory=list,
        description="Tools executed while producing the answer, in order",
    )
    eval_count: int | None = Field(
        default=None, description="Number of tokens generated"
    )
    prompt_eval_count: int | None = Field(
        default=None, description="Number of tokens in the prompt"
    )


class ErrorEvent(BaseModel):
    """SSE event emitted when an error occurs during streaming."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class DoneEvent(BaseModel):
    """SSE event emitted when the stream is complete."""

    model: str
