class AIError(Exception):
    """Raised when a call to the generative backend fails."""


class AITransportError(AIError):
    """Raised when the provider call fails due to network/infrastructure issues."""


class AIResponseError(AIError):
    """Raised when the provider answers without usable content."""
