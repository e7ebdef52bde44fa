"""Generative backend adapter."""

from abc import ABC, abstractmethod

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from learnpath.core.config import Settings
from learnpath.core.exceptions import GenerationUnavailableError
from learnpath.core.logging import get_logger

logger = get_logger(__name__)


class GenerativeClient(ABC):
    """Turns a prompt into best-effort text that should contain JSON.

    Implementations may raise on network or quota failures; callers decide
    what that means.
    """

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        *,
        max_tokens: int,
        temperature: float,
        system: str | None = None,
    ) -> str:
        raise NotImplementedError


class OpenAIGenerativeClient(GenerativeClient):
    """OpenAI-compatible chat completion via LangChain."""

    def __init__(self, llm: ChatOpenAI, *, json_mode: bool = True):
        self.llm = llm
        self.json_mode = json_mode

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIGenerativeClient":
        kwargs: dict = {"model": settings.OPENAI_MODEL}
        if settings.OPENAI_API_KEY:
            kwargs["api_key"] = settings.OPENAI_API_KEY
        if settings.OPENAI_API_BASE_URL:
            kwargs["base_url"] = settings.OPENAI_API_BASE_URL

        logger.info("Initializing LLM", model=settings.OPENAI_MODEL)
        return cls(ChatOpenAI(**kwargs), json_mode=settings.OPENAI_JSON_MODE)

    async def complete(
        self,
        prompt: str,
        *,
        max_tokens: int,
        temperature: float,
        system: str | None = None,
    ) -> str:
        bind_kwargs: dict = {"max_tokens": max_tokens, "temperature": temperature}
        if self.json_mode:
            bind_kwargs["response_format"] = {"type": "json_object"}

        messages: list[BaseMessage] = []
        if system:
            messages.append(SystemMessage(content=system))
        messages.append(HumanMessage(content=prompt))

        resp = await self.llm.bind(**bind_kwargs).ainvoke(messages)
        content = resp.content
        if isinstance(content, list):
            # Multi-part content: keep the text parts only
            content = "".join(
                part if isinstance(part, str) else part.get("text", "") for part in content
            )
        return content


async def request_generation(
    client: GenerativeClient,
    prompt: str,
    *,
    max_tokens: int,
    temperature: float,
    system: str | None = None,
    purpose: str,
) -> str:
    """Call the generative backend once, mapping failures to ``GenerationUnavailableError``.

    Blank output counts as unavailable: there is nothing to coerce.
    """
    try:
        text = await client.complete(
            prompt, max_tokens=max_tokens, temperature=temperature, system=system
        )
    except Exception as exc:
        logger.error("Generation request failed", purpose=purpose, error=str(exc), exc_info=True)
        raise GenerationUnavailableError(f"{purpose} generation is unavailable") from exc

    if not text or not text.strip():
        logger.error("Generation returned no content", purpose=purpose)
        raise GenerationUnavailableError(f"{purpose} generation returned no content")
    return text
