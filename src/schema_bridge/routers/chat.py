"""Chat API endpoints.

This module provides endpoints for chatting with a tool-enabled model,
including non-streaming and streaming responses via SSE.
"""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sse_starlette.sse import EventSourceResponse

from schema_bridge.dependencies import get_chat_service
from schema_bridge.models.chat import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    DoneEvent,
    ErrorEvent,
    ToolCallRecord,
)
from schema_bridge.services import ToolChatService, ToolLoopLimitError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])


def _resolve_model(request_body: ChatRequest, request: Request) -> str:
    return request_body.model or request.app.state.settings.default_model


@router.post("", response_model=ChatResponse)
async def chat_non_streaming(
    request_body: ChatRequest,
    request: Request,
    chat_service: ToolChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Send a conversation and receive the model's final answer.

    Tool calls made by the model are executed against the MCP server until
    the model answers in plain text.

    Args:
        request_body: Chat request containing the history and options
        request: FastAPI request object
        chat_service: Injected chat service

    Returns:
        ChatResponse with the final assistant message and executed tools

    Raises:
        HTTPException: 502 if Ollama fails or the tool loop does not end
    """
    model = _resolve_model(request_body, request)
    messages = [message.model_dump() for message in request_body.messages]

    logger.info(f"Sending {len(messages)} messages to Ollama with model {model}")

    try:
        outcome = await chat_service.run(model, messages, think=request_body.think)
    except ToolLoopLimitError as e:
        logger.error(str(e))
        raise HTTPException(
            status_code=502,
            detail={
                "error": {
                    "code": "tool_loop_limit",
                    "message": str(e),
                    "details": {"model": model},
                }
            },
        )
    except Exception as e:
        logger.error(f"Ollama chat error: {e}")
        raise HTTPException(
            status_code=502,
            detail={
                "error": {
                    "code": "ollama_error",
                    "message": f"Failed to get response from Ollama: {str(e)}",
                    "details": {},
                }
            },
        )

    return ChatResponse(
        model=outcome.model,
        message=ChatMessage(role="assistant", content=outcome.content),
        tool_calls_executed=[ToolCallRecord(**call) for call in outcome.tool_calls],
        eval_count=outcome.eval_count,
        prompt_eval_count=outcome.prompt_eval_count,
    )


@router.post("/stream")
async def chat_streaming(
    request_body: ChatRequest,
    request: Request,
    chat_service: ToolChatService = Depends(get_chat_service),
) -> EventSourceResponse:
    """Stream a tool-enabled conversation via Server-Sent Events (SSE).

    SSE Events:
        - tool_call: The model called a tool
        - tool_result: Output of that tool call
        - message: The final assistant answer
        - error: If an error occurs
        - done: Stream is complete
    """
    model = _resolve_model(request_body, request)
    messages = [message.model_dump() for message in request_body.messages]

    logger.info(f"Starting streaming chat with {len(messages)} messages and model {model}")

    async def event_generator():
        """Generate SSE events from the chat service."""
        try:
            async for event in chat_service.run_events(
                model, messages, think=request_body.think
            ):
                if await request.is_disconnected():
                    logger.warning("Client disconnected during streaming")
                    return
                yield {"event": event.type, "data": json.dumps(event.data)}
        except ToolLoopLimitError as e:
            logger.error(str(e))
            error_event = ErrorEvent(code="tool_loop_limit", message=str(e))
            yield {"event": "error", "data": error_event.model_dump_json()}
            return
        except Exception as e:
            logger.error(f"Error during streaming chat: {e}")
            error_event = ErrorEvent(
                code="ollama_error",
                message=f"Failed to generate response: {str(e)}",
                details={"model": model},
            )
            yield {"event": "error", "data": error_event.model_dump_json()}
            return

        yield {"event": "done", "data": DoneEvent(model=model).model_dump_json()}

    return EventSourceResponse(event_generator())
