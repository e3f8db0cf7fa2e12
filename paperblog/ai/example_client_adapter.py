"""Offline generative client.

Use this module as a reference when implementing new provider adapters.
Implement BaseAIClient and register the provider in AIClientFactory.
"""

import json
from collections.abc import Sequence
from typing import ClassVar

from paperblog.ai.client_base import BaseAIClient
from paperblog.ai.models import ContentPart


class ExampleClientAdapter(BaseAIClient):
    """Returns a fixed blog JSON for structured calls and ``"0"`` otherwise.

    No network calls. Text-only, so logo detection is skipped when it is in use.
    """

    BLOG_RESPONSE: ClassVar[dict[str, object]] = {
        "title": "What This Paper Found",
        "summary": "A short tour of the study, its method and its results.",
        "tags": ["research", "science", "summary", "paper", "blog"],
        "sections": [
            {
                "heading": "Why It Matters",
                "content": "<p>The authors set out to answer a practical question.</p>",
                "images": [0],
            },
            {
                "heading": "What They Found",
                "content": "<p>The results point to a clear and measurable effect.</p>",
                "images": [],
            },
        ],
    }
    SCALAR_RESPONSE: ClassVar[str] = "0"

    def __init__(self) -> None:
        self.calls: list[list[ContentPart]] = []

    @property
    def supports_vision(self) -> bool:
        return False

    def generate(
        self,
        parts: Sequence[ContentPart],
        *,
        temperature: float,
        max_tokens: int,
        json_output: bool = False,
    ) -> str:
        _ = temperature, max_tokens
        self.calls.append(list(parts))
        if json_output:
            return json.dumps(self.BLOG_RESPONSE)
        return self.SCALAR_RESPONSE
