"""
Prompt builder for generative-chat requests.

Responsible for:
- Default chat role and prompt templates (with and without references)
- Rendering user-editable classification templates ({{input}}, {{reference}})
- Rendering the fixed filename-suggestion prompt (Jinja2 template)

Classification templates are user-authored text, so they are NOT rendered
with Jinja2: only the first literal `{{input}}` and `{{reference}}` tokens
are substituted and everything else is passed through verbatim.
"""

from pathlib import Path
from typing import Optional, Sequence

import structlog
from jinja2 import Environment, FileSystemLoader

from auto_classifier.backends.text_utils import strip_frontmatter, truncate_text


logger = structlog.get_logger(__name__)

INPUT_TOKEN = "{{input}}"
REFERENCE_TOKEN = "{{reference}}"

DEFAULT_CHAT_ROLE = "You are a JSON answer bot. Don't answer other words."

DEFAULT_PROMPT_TEMPLATE = """Classify this content:
\"\"\"
{{input}}
\"\"\"
Answer format is JSON {reliability:0~1, outputs:[tag1,tag2,...]}.
Even if you are not sure, qualify the reliability and recommend a proper tag.
Output must be array type.

Use the following tags as references:
{{reference}}
"""

DEFAULT_PROMPT_TEMPLATE_WO_REF = """Classify this content:
\"\"\"
{{input}}
\"\"\"
Answer format is JSON {reliability:0~1, outputs:[tag1,tag2,...]}.
Even if you are not sure, qualify the reliability and recommend proper tags.
Output must be array type.
Please recommend new tags that describe the content.
"""

FILENAME_SYSTEM_ROLE = "You name notes. Answer with a filename only."

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


def default_prompt_template(use_references: bool) -> str:
    """Default classification template for the given reference mode."""
    return DEFAULT_PROMPT_TEMPLATE if use_references else DEFAULT_PROMPT_TEMPLATE_WO_REF


def render_classification_prompt(
    template: str,
    input_text: str,
    reference_labels: Sequence[str],
) -> str:
    """
    Substitute input text and reference labels into a classification template.

    Replaces the first occurrence of `{{input}}` with the input text, then the
    first occurrence of `{{reference}}` with the comma-joined labels. Further
    occurrences of either token are left as-is.

    Args:
        template: User-editable prompt template
        input_text: Note text to classify
        reference_labels: Candidate labels (may be empty)

    Returns:
        Rendered user prompt
    """
    prompt = template.replace(INPUT_TOKEN, input_text, 1)
    prompt = prompt.replace(REFERENCE_TOKEN, ",".join(reference_labels), 1)
    return prompt


class PromptBuilder:
    """
    Build prompts for generative-chat requests.

    Handles:
    - Classification templates (first-token substitution)
    - Filename prompt (Jinja2 template, frontmatter-stripped and truncated body)
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        filename_body_limit: int = 2000,
    ):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing the filename prompt template
            filename_body_limit: Max body characters embedded in the filename prompt
        """
        self.templates_dir = Path(templates_dir or DEFAULT_TEMPLATES_DIR)
        self.filename_body_limit = filename_body_limit

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,  # We're generating prompts, not HTML
            keep_trailing_newline=False,
        )
        self.filename_template = self.jinja_env.get_template("filename_prompt.txt")

        logger.debug(
            "PromptBuilder initialized",
            templates_dir=str(self.templates_dir),
            filename_body_limit=filename_body_limit,
        )

    def build_classification_prompt(
        self,
        template: str,
        input_text: str,
        reference_labels: Sequence[str],
    ) -> str:
        prompt = render_classification_prompt(template, input_text, reference_labels)
        logger.debug(
            "Classification prompt built",
            template_length=len(template),
            input_length=len(input_text),
            reference_count=len(reference_labels),
            prompt_length=len(prompt),
        )
        return prompt

    def build_filename_prompt(self, title: str, content: str) -> str:
        """
        Render the filename-suggestion prompt.

        The frontmatter block is removed BEFORE truncation, so the limit
        applies to body text only.

        Args:
            title: Current note title
            content: Full note content (frontmatter included)

        Returns:
            Rendered prompt
        """
        body = strip_frontmatter(content)
        truncated_body = truncate_text(body, self.filename_body_limit)
        rendered = self.filename_template.render(
            title=title,
            body=truncated_body,
        ).strip()

        logger.debug(
            "Filename prompt built",
            original_body_length=len(body),
            truncated_body_length=len(truncated_body),
            prompt_length=len(rendered),
        )
        return rendered
