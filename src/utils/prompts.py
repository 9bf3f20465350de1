"""
Utility functions for building model input from conversation history.
"""

from typing import List, Dict, Any
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage


def recent_history(messages: List[Dict[str, Any]], window: int) -> List[Dict[str, Any]]:
    """
    Keep the last user/assistant messages of a conversation.

    Args:
        messages: Conversation messages with role and content
        window: Maximum number of messages to keep

    Returns:
        At most ``window`` messages, oldest first
    """
    if window <= 0:
        return []
    relevant = [m for m in messages if m.get("role") in ("user", "assistant")]
    return relevant[-window:]


def build_chat_messages(
    system_prompt: str,
    history: List[Dict[str, Any]],
    user_message: str,
    window: int,
) -> List[BaseMessage]:
    """
    Build the message list sent to the chat model.

    Args:
        system_prompt: System instructions
        history: Prior conversation messages
        user_message: New input for this turn
        window: Number of prior messages to include

    Returns:
        System message, recent history and the new user message
    """
    chat: List[BaseMessage] = [SystemMessage(content=system_prompt)]
    for message in recent_history(history, window):
        content = message.get("content", "")
        if message["role"] == "user":
            chat.append(HumanMessage(content=content))
        else:
            chat.append(AIMessage(content=content))
    chat.append(HumanMessage(content=user_message))
    return chat
