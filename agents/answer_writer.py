# agents/answer_writer.py
import logging
from typing import Mapping

from langchain_openai import ChatOpenAI
from langchain_core.messages import SystemMessage, HumanMessage

from config import Settings
from errors import LLMError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful assistant."


def build_prompt(question: str, citations: Mapping[str, str]) -> str:
    refs = "\n".join(f"{label}: {url}" for label, url in citations.items())
    return (
        f"{question}\n\n"
        "Please use the following citation format when referencing sources: [1], [2], etc. "
        "The citations should correspond to the following references:\n"
        f"{refs}"
    )


def ask_llm(
    question: str,
    context: str,
    citations: Mapping[str, str],
    model: str,
    settings: Settings,
) -> str:
    """
    Ask the chat model and return the raw answer.

    The search context is prepended to the model output (context, blank
    line, answer); both renderers receive that combined text.
    """
    if not settings.openai_api_key:
        raise LLMError("Failed to query the language model: OPENAI_API_KEY is not set")

    messages = [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=build_prompt(question, citations)),
    ]

    try:
        logger.info("Sending request to OpenAI with model: %s", model)
        llm = ChatOpenAI(
            model=model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            api_key=settings.openai_api_key,
        )
        response = llm.invoke(messages)
    except Exception as e:
        logger.error("Error during LLM query: %s", e)
        raise LLMError(f"Failed to query the language model: {e}") from e

    logger.info("OpenAI request successful")
    content = response.content if hasattr(response, "content") else str(response)
    return f"{context}\n\n{content}"
