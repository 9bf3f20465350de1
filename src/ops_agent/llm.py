"""LLM clients for the store operations agent."""

import os
from dotenv import load_dotenv
from langchain_openai import ChatOpenAI

# Load environment variables from .env file
load_dotenv()


def assistant_llm():
    """LLM that decides which tools to call."""
    return ChatOpenAI(model=os.getenv("MODEL_NAME", "gpt-4o"), temperature=0)


def drafter_llm():
    """LLM for phrasing the final reply from tool results."""
    return ChatOpenAI(model=os.getenv("MODEL_NAME", "gpt-4o"), temperature=0.2)
