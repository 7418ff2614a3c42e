"""Context builder - assembles the text block sent alongside the question."""

from collections.abc import Sequence

from rag_agent.schemas.internal import RetrievedChunk
from rag_agent.schemas.requests import Message


class ContextBuilder:
    """Builds the system instruction and per-request context for generation."""

    DEFAULT_SYSTEM_PROMPT = """You are a helpful AI assistant that answers questions based on the provided context.
Guidelines:
1. Be concise but helpful
2. Use the context when relevant
3. If you used a tool/plugin, mention it
4. Maintain a friendly tone"""

    def __init__(
        self,
        system_prompt: str | None = None,
        max_context_chars: int | None = None,
    ):
        self.system_prompt = system_prompt or self.DEFAULT_SYSTEM_PROMPT
        self.max_context_chars = max_context_chars

    def assemble(
        self,
        chunks: Sequence[RetrievedChunk],
        plugin_output: str | None,
        history: Sequence[Message],
    ) -> str:
        """
        Combine documents, plugin output and history into one context block.

        Sections always appear in the order Documents, Plugin Output,
        Conversation History, separated by a blank line. A section whose
        input is empty is left out entirely.

        Args:
            chunks: Retrieved chunks, in retrieval (descending score) order
            plugin_output: Text from the plugin that ran, if any
            history: Recent messages, oldest first

        Returns:
            The context text (empty if every input is empty)
        """
        sections: list[str] = []

        if chunks:
            lines = ["Relevant Documents:"]
            lines.extend(
                f"[Document {i} from {chunk.source}]: {chunk.content}"
                for i, chunk in enumerate(chunks, 1)
            )
            sections.append("\n".join(lines))

        if plugin_output:
            sections.append(f"Plugin Output: {plugin_output}")

        if history:
            lines = ["Conversation History:"]
            lines.extend(
                f"{'User' if msg.role == 'user' else 'AI'}: {msg.content}" for msg in history
            )
            sections.append("\n".join(lines))

        context = "\n\n".join(sections)

        if self.max_context_chars is not None and len(context) > self.max_context_chars:
            context = context[: self.max_context_chars]

        return context
