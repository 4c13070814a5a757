"""Message store.

The ordered conversation, the single source of truth for what is on screen
and what is sent to the provider.
"""

from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import Enum

from ..llm.base import LLMProvider
from ..llm.models import ChatMessage
from .config import DEFAULT_SYSTEM_PROMPT, HISTORY_WINDOW, SEPARATOR


class MessageType(str, Enum):
    """Kind of a conversation entry."""

    SYSTEM = "System"
    USER = "User"
    ASSISTANT = "Assistant"
    NOTICE = "Notice"
    ERROR = "Error"


@dataclass(frozen=True)
class Message:
    """A conversation entry."""

    type: MessageType
    content: str

    def to_chat_message(self) -> ChatMessage:
        return ChatMessage(role=self.type.value.lower(), content=self.content)


class MessageStore:
    """Ordered messages whose first element is always the system message.

    Messages are immutable once appended; the only in-place growth is
    ``extend_assistant`` on the last message while a reply streams in.
    """

    def __init__(self, system_prompt: str = DEFAULT_SYSTEM_PROMPT) -> None:
        self._messages: list[Message] = [Message(MessageType.SYSTEM, system_prompt)]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    @property
    def system(self) -> Message:
        return self._messages[0]

    @property
    def last(self) -> Message:
        return self._messages[-1]

    def append(self, message: Message) -> None:
        if message.type is MessageType.SYSTEM:
            raise ValueError("the system message is fixed at the start of the conversation")
        self._messages.append(message)

    def add(self, message_type: MessageType, content: str) -> Message:
        message = Message(message_type, content)
        self.append(message)
        return message

    def extend_assistant(self, delta: str) -> None:
        """Append a streamed delta to the in-flight assistant message."""
        if self.last.type is not MessageType.ASSISTANT:
            raise ValueError("no assistant message is streaming")
        self._messages[-1] = replace(self.last, content=self.last.content + delta)

    def replace_last(self, message: Message) -> None:
        if len(self._messages) == 1:
            raise ValueError("the system message cannot be replaced")
        self._messages[-1] = message

    def reset(self) -> None:
        """Start a new conversation, keeping only the system message."""
        del self._messages[1:]

    def chat_history(self, limit: int = HISTORY_WINDOW) -> list[ChatMessage]:
        """The system message followed by the most recent user/assistant turns."""
        turns = [m for m in self._messages if m.type in (MessageType.USER, MessageType.ASSISTANT)]
        recent = turns[-limit:] if limit > 0 else []
        return [self.system.to_chat_message(), *(m.to_chat_message() for m in recent)]


def _provider_line(provider: LLMProvider) -> str:
    return (
        f"Provider: {provider.name} "
        f"(Model: {provider.model}, Temperature: {provider.temperature:.1f})"
    )


def welcome_notice(provider: LLMProvider) -> Message:
    lines = [
        "Welcome to chait interactive mode!",
        _provider_line(provider),
        "Type ':h' to see all available commands.",
        SEPARATOR,
    ]
    return Message(MessageType.NOTICE, "\n".join(lines))


def help_notice(provider: LLMProvider) -> Message:
    lines = [
        SEPARATOR,
        _provider_line(provider),
        "Available commands:",
        "- ':h' - Show this message",
        "- ':p' (ctrl+p) - Select provider",
        "- ':m' (ctrl+o) - Select model",
        "- ':t' (ctrl+t) - Select temperature",
        "- ':k' - Set the API key",
        "- ':c' - Start a new conversation",
        "- 'pgup'/'pgdown'/'home'/'end' - Scroll",
        "- 'ctrl+j' - Insert a newline",
        "- 'ctrl+d' - Toggle the log panel",
        "- 'ctrl+c' - Cancel, or exit interactive mode",
        SEPARATOR,
    ]
    return Message(MessageType.NOTICE, "\n".join(lines))
