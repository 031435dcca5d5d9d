"""Short descriptive labels for text records.

The label comes from an OpenAI-compatible chat completion. Naming is a
convenience: when the call fails, times out or returns nothing usable the
record is named after the current date instead, and creation goes ahead.
"""

import asyncio
import logging
from datetime import datetime, timezone
from openai import AsyncOpenAI
from cloudspace.config import Settings

logger = logging.getLogger(__name__)

EXCERPT_CHARS = 500

SYSTEM_PROMPT = (
    "You are a helpful assistant that creates concise, descriptive names for text content. "
    "Return only the name, nothing else."
)

USER_PROMPT = (
    "Generate a short, descriptive name (3-5 words max) for this text content. "
    "Only return the name, nothing else:\n\n{excerpt}"
)

def fallback_name(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"Text {now.date().isoformat()}"

class NamingAssistant:
    def __init__(self, settings: Settings, client: AsyncOpenAI | None = None):
        self.model = settings.NAMING_MODEL
        self.timeout = settings.NAMING_TIMEOUT_SECONDS
        if client is None and settings.OPENAI_API_KEY:
            client = AsyncOpenAI(
                api_key=settings.OPENAI_API_KEY,
                base_url=settings.OPENAI_BASE_URL,
                timeout=self.timeout,
                max_retries=0,
            )
        self.client = client

    async def name_for(self, text: str) -> str:
        if self.client is None:
            return fallback_name()

        try:
            label = await asyncio.wait_for(self._complete(text[:EXCERPT_CHARS]), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Naming call timed out after {self.timeout}s")
            return fallback_name()
        except Exception as e:
            logger.warning(f"Naming call failed: {e}")
            return fallback_name()

        return label or fallback_name()

    async def _complete(self, excerpt: str) -> str:
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT.format(excerpt=excerpt)},
            ],
        )
        if not completion.choices:
            return ""
        content = completion.choices[0].message.content
        return content.strip() if isinstance(content, str) else ""
