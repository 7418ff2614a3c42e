"""Tests for the context builder."""

from rag_agent.schemas import Message, RetrievedChunk
from rag_agent.services import ContextBuilder

CHUNKS = [
    RetrievedChunk(content="Python is a programming language.", source="python.md", score=0.9),
    RetrievedChunk(content="It was created by Guido van Rossum.", source="history.txt", score=0.7),
]
HISTORY = [
    Message(role="user", content="My name is John"),
    Message(role="assistant", content="Nice to meet you, John!"),
]


def test_all_sections_in_order() -> None:
    """Test the exact layout with every input present."""
    context = ContextBuilder().assemble(CHUNKS, "Weather in Paris: 24°C, Sunny", HISTORY)

    assert context == (
        "Relevant Documents:\n"
        "[Document 1 from python.md]: Python is a programming language.\n"
        "[Document 2 from history.txt]: It was created by Guido van Rossum.\n"
        "\n"
        "Plugin Output: Weather in Paris: 24°C, Sunny\n"
        "\n"
        "Conversation History:\n"
        "User: My name is John\n"
        "AI: Nice to meet you, John!"
    )


def test_empty_inputs_give_empty_context() -> None:
    """Test that no section headers appear without content."""
    assert ContextBuilder().assemble([], None, []) == ""
    assert ContextBuilder().assemble([], "", []) == ""


def test_documents_section_omitted() -> None:
    """Test omission of the documents section only."""
    context = ContextBuilder().assemble([], "plugin text", HISTORY)

    assert "Relevant Documents:" not in context
    assert context.startswith("Plugin Output: plugin text\n\nConversation History:")


def test_plugin_section_omitted() -> None:
    """Test omission of the plugin section only."""
    context = ContextBuilder().assemble(CHUNKS, None, HISTORY)

    assert "Plugin Output" not in context
    assert context.index("Relevant Documents:") < context.index("Conversation History:")


def test_history_section_omitted() -> None:
    """Test omission of the history section only."""
    context = ContextBuilder().assemble(CHUNKS, "out", [])

    assert "Conversation History:" not in context
    assert context.endswith("Plugin Output: out")


def test_documents_keep_input_order() -> None:
    """Test that chunks are numbered in the order given, not re-sorted."""
    reversed_chunks = list(reversed(CHUNKS))
    context = ContextBuilder().assemble(reversed_chunks, None, [])

    assert "[Document 1 from history.txt]" in context
    assert "[Document 2 from python.md]" in context


def test_max_context_chars_caps_output() -> None:
    """Test the optional length cap."""
    builder = ContextBuilder(max_context_chars=20)
    context = builder.assemble(CHUNKS, None, HISTORY)

    assert len(context) == 20
    assert context == "Relevant Documents:\n"


def test_system_prompt() -> None:
    """Test default and custom system instructions."""
    assert "If you used a tool/plugin, mention it" in ContextBuilder().system_prompt
    assert ContextBuilder(system_prompt="Be a pirate.").system_prompt == "Be a pirate."
