"""OpenAI Responses API client for feeding insights."""

from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from bottle_tracker.services.insights import InsightsClient


@dataclass
class OpenAIInsightsClient(InsightsClient):
    """Insights client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    http_client: httpx.AsyncClient | None = None

    @classmethod
    def create(cls, api_key: str, timeout: float = 30) -> "OpenAIInsightsClient":
        """Create an OpenAI insights client with a managed httpx session."""
        http_client = httpx.AsyncClient(timeout=timeout)
        return cls(
            client=AsyncOpenAI(api_key=api_key, http_client=http_client),
            http_client=http_client,
        )

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
    ) -> str:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "feeding_insights",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.http_client is not None:
            await self.http_client.aclose()
