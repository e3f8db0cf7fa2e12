from pathlib import Path

from paperblog.ai.exceptions import AIError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


class PromptTemplateError(AIError):
    """Raised when a bundled prompt template cannot be read."""


def load_prompt_template(name: str, prompt_dir: Path | None = None) -> str:
    """Load a prompt template by file stem.

    Args:
        name: Template name without extension, e.g. ``"blog_prompt"``.
        prompt_dir: Directory holding the templates.
                    Defaults to the bundled ``prompts`` directory.

    Returns:
        The raw template string with ``str.format`` placeholders.

    Raises:
        PromptTemplateError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / f"{name}.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptTemplateError(f"Failed to load prompt template '{name}': {exc}") from exc
