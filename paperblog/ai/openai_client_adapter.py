from collections.abc import Sequence

import httpx
import openai

from paperblog.ai.client_base import BaseAIClient
from paperblog.ai.exceptions import AIResponseError, AITransportError
from paperblog.ai.models import ContentPart, ImagePart, TextPart


class OpenAIClientAdapter(BaseAIClient):
    """Generative client built on the OpenAI-compatible chat completions API.

    Gemini, OpenRouter and OpenAI all expose this API; only the base URL,
    model and vision capability differ.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
        vision: bool = True,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._model = model
        self._vision = vision

    @property
    def supports_vision(self) -> bool:
        return self._vision

    def generate(
        self,
        parts: Sequence[ContentPart],
        *,
        temperature: float,
        max_tokens: int,
        json_output: bool = False,
    ) -> str:
        request: dict[str, object] = {
            "model": self._model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": self._build_content(parts)}],
        }
        if json_output:
            request["response_format"] = {"type": "json_object"}

        try:
            response = self._client.chat.completions.create(**request)  # type: ignore[call-overload]
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AITransportError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AITransportError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise AIResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise AIResponseError("AI returned empty response")
        return content

    def _build_content(self, parts: Sequence[ContentPart]) -> str | list[dict[str, object]]:
        if not self._vision:
            return "\n\n".join(part.text for part in parts if isinstance(part, TextPart))

        content: list[dict[str, object]] = []
        for part in parts:
            if isinstance(part, ImagePart):
                content.append({"type": "image_url", "image_url": {"url": part.data_url()}})
            else:
                content.append({"type": "text", "text": part.text})
        return content
