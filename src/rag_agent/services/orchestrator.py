"""Orchestrator service - coordinates the per-message RAG workflow."""

import asyncio
import time

from rag_agent.observability import LogEvents, get_logger
from rag_agent.schemas.internal import PluginResult, RetrievedChunk
from rag_agent.schemas.requests import Message
from rag_agent.services.context_builder import ContextBuilder
from rag_agent.services.generation import GenerationService
from rag_agent.services.memory import SessionStore
from rag_agent.services.plugins import (
    IntentDetector,
    PluginError,
    PluginNotFoundError,
    PluginRegistry,
)
from rag_agent.services.retrieval import RetrievalError, RetrievalService

logger = get_logger(__name__)


class OrchestratorError(Exception):
    """Error in orchestration."""

    pass


class MessageValidationError(OrchestratorError):
    """The message or session id is missing."""

    pass


class Orchestrator:
    """
    Main orchestrator for the agent workflow.

    For each message:
    1. Read the history window and record the user message
    2. Retrieve document chunks and run a detected plugin, concurrently
    3. Assemble the context block
    4. Generate an answer (or a fallback)
    5. Record the answer as the assistant message

    Steps 1-5 run under the session's lock, so concurrent requests for one
    session are serialized while other sessions proceed independently.
    Retrieval and plugin failures are absorbed; generation never raises.
    """

    def __init__(
        self,
        session_store: SessionStore,
        retrieval_service: RetrievalService,
        plugin_registry: PluginRegistry,
        intent_detector: IntentDetector,
        context_builder: ContextBuilder,
        generation_service: GenerationService,
        top_k: int = 3,
        history_window: int = 2,
        retrieval_timeout: float | None = None,
        plugin_timeout: float | None = None,
    ):
        self.session_store = session_store
        self.retrieval_service = retrieval_service
        self.plugin_registry = plugin_registry
        self.intent_detector = intent_detector
        self.context_builder = context_builder
        self.generation_service = generation_service
        self.top_k = top_k
        self.history_window = history_window
        self.retrieval_timeout = retrieval_timeout
        self.plugin_timeout = plugin_timeout

    async def process_message(self, message: str | None, session_id: str | None) -> str:
        """
        Answer one chat message and record the exchange in session memory.

        Args:
            message: The user's message
            session_id: Caller-supplied session identifier

        Returns:
            The generated answer, or a fallback string if generation failed

        Raises:
            MessageValidationError: If message or session_id is missing;
                no session state is touched in that case
        """
        if not message or not session_id:
            raise MessageValidationError("Both message and session_id are required")

        total_start = time.perf_counter()
        logger.info(LogEvents.MESSAGE_RECEIVED, session_id=session_id)

        async with self.session_store.session_lock(session_id):
            # History excludes the message being answered; it is sent as the question.
            history = self.session_store.recent_window(session_id, self.history_window)
            self.session_store.append(session_id, Message(role="user", content=message))

            chunks, plugin_result = await asyncio.gather(
                self._retrieve(message),
                self._run_plugin(message),
            )

            context = self.context_builder.assemble(
                chunks=chunks,
                plugin_output=plugin_result.output if plugin_result else None,
                history=history,
            )

            generation_start = time.perf_counter()
            response = await self.generation_service.generate(
                system_prompt=self.context_builder.system_prompt,
                context=context,
                question=message,
            )
            generation_time_ms = int((time.perf_counter() - generation_start) * 1000)

            self.session_store.append(session_id, Message(role="assistant", content=response))

        logger.info(
            LogEvents.MESSAGE_COMPLETED,
            session_id=session_id,
            chunks=len(chunks),
            plugin=plugin_result.plugin if plugin_result else None,
            history_messages=len(history),
            generation_time_ms=generation_time_ms,
            total_time_ms=int((time.perf_counter() - total_start) * 1000),
        )
        return response

    async def _retrieve(self, query: str) -> list[RetrievedChunk]:
        """Retrieve chunks; any failure yields an empty list."""
        try:
            chunks = await asyncio.wait_for(
                self.retrieval_service.relevant_chunks(query, self.top_k),
                timeout=self.retrieval_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(LogEvents.RETRIEVAL_TIMEOUT, timeout=self.retrieval_timeout)
            return []
        except RetrievalError as e:
            logger.warning(LogEvents.RETRIEVAL_FAILED, error=str(e))
            return []

        logger.debug(LogEvents.RETRIEVAL_COMPLETED, chunks=len(chunks))
        return chunks

    async def _run_plugin(self, message: str) -> PluginResult | None:
        """Detect and invoke a plugin; any failure yields no result."""
        plugin_name = self.intent_detector.detect(message)
        if plugin_name is None:
            return None

        logger.info(LogEvents.PLUGIN_DETECTED, plugin=plugin_name)
        try:
            output = await asyncio.wait_for(
                self.plugin_registry.invoke(plugin_name, message),
                timeout=self.plugin_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(LogEvents.PLUGIN_TIMEOUT, plugin=plugin_name, timeout=self.plugin_timeout)
            return None
        except PluginNotFoundError:
            logger.warning(LogEvents.PLUGIN_FAILED, plugin=plugin_name, error="not registered")
            return None
        except PluginError as e:
            logger.warning(LogEvents.PLUGIN_FAILED, plugin=plugin_name, error=str(e))
            return None

        if not output:
            return None

        logger.info(LogEvents.PLUGIN_COMPLETED, plugin=plugin_name)
        return PluginResult(plugin=plugin_name, output=output)
