"""Derive the question/answer transcript from a message history."""

from typing import Iterable, List

from docqa.models.conversation import Message, MessageType, Turn

_DIALOGUE_TYPES = (MessageType.USER, MessageType.ASSISTANT)


def build_transcript(messages: Iterable[Message]) -> List[Turn]:
    """
    Pair each user message with the assistant reply that immediately follows it.

    Summary notices and pending markers are ignored. A user message whose next
    dialogue message is not an assistant reply (unanswered, failed, or followed
    by another question) yields no turn, and a user message is never paired
    with a reply that came before it.

    Args:
        messages: Message history, oldest first.

    Returns:
        Resolved turns, oldest first.
    """
    dialogue = [message for message in messages if message.type in _DIALOGUE_TYPES]

    transcript: List[Turn] = []
    for current, following in zip(dialogue, dialogue[1:]):
        if current.type is MessageType.USER and following.type is MessageType.ASSISTANT:
            transcript.append(Turn(question=current.content, answer=following.content))
    return transcript
