from pathlib import Path

import pytest

from paperblog.ai.prompt_loader import PromptTemplateError, load_prompt_template


class TestLoadPromptTemplate:
    @pytest.mark.parametrize(
        "name", ["author_prompt", "blog_prompt", "logo_prompt", "thumbnail_prompt"]
    )
    def test_bundled_templates_load(self, name: str) -> None:
        assert load_prompt_template(name).strip()

    def test_blog_template_formats_with_all_placeholders(self) -> None:
        template = load_prompt_template("blog_prompt")
        rendered = template.format(
            title="T",
            author="A",
            page_count=1,
            section_count=2,
            image_count=0,
            language="English",
            language_instruction="LI",
            language_requirements="LR",
            image_instructions="II",
            layout="LAYOUT",
        )
        assert "LAYOUT" in rendered
        assert "{" in rendered  # the JSON shape example survives formatting

    def test_custom_directory(self, tmp_path: Path) -> None:
        (tmp_path / "custom.txt").write_text("Hello {name}", encoding="utf-8")
        assert load_prompt_template("custom", tmp_path) == "Hello {name}"

    def test_missing_template_raises(self, tmp_path: Path) -> None:
        with pytest.raises(PromptTemplateError, match="missing"):
            load_prompt_template("missing", tmp_path)
