from abc import ABC, abstractmethod
from collections.abc import Sequence

from paperblog.ai.models import ContentPart


class BaseAIClient(ABC):
    """Contract for provider-specific generative AI clients."""

    @property
    @abstractmethod
    def supports_vision(self) -> bool:
        """Whether image parts reach the model."""

    @abstractmethod
    def generate(
        self,
        parts: Sequence[ContentPart],
        *,
        temperature: float,
        max_tokens: int,
        json_output: bool = False,
    ) -> str:
        """Send an ordered list of text and image parts and return the reply text.

        Args:
            parts: Prompt segments in the order the model should read them.
            temperature: Sampling temperature.
            max_tokens: Upper bound on generated tokens.
            json_output: Ask the provider for a JSON object reply where supported.

        Returns:
            The raw reply text.

        Raises:
            AITransportError: on network, timeout or API failures.
            AIResponseError: if the provider returned no content.
        """
