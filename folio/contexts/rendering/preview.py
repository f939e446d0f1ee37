"""
HTML preview of a classified resume.

Renders the same block sequence the PDF is laid out from, using a Jinja2
template and the active style table, so the on-screen preview and the PDF
agree on roles, emphasis and links.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound

from folio.contexts.layout.blocks import (
    Block,
    ContactLine,
    Name,
    Paragraph,
    SubsectionHeader,
)
from folio.contexts.layout.inline_styles import tokenize
from folio.contexts.layout.section_patterns import detect_link
from folio.contexts.layout.styles import LayoutSettings

TEMPLATES_PATH = Path(__file__).parent / "templates"
PREVIEW_TEMPLATE = "preview.html.jinja"


def _segment_dicts(text: str, bold: bool = False) -> List[Dict[str, Any]]:
    return [{"text": s.text, "bold": s.bold or bold} for s in tokenize(text)]


def block_view(block: Block, settings: LayoutSettings) -> Dict[str, Any]:
    """
    Flatten a block into the plain dict the preview template consumes.

    Example:
        >>> block_view(Bullet("Built **FOLIO**"), LayoutSettings())["segments"][-1]
        {'text': 'FOLIO', 'bold': True}
    """
    kind = block.kind
    style = "bold_paragraph" if isinstance(block, Paragraph) and block.bold else kind
    view: Dict[str, Any] = {"kind": kind, "style": style}

    if isinstance(block, ContactLine):
        view["parts"] = [{"text": part, "url": detect_link(part)} for part in block.parts]
    elif isinstance(block, SubsectionHeader):
        view["segments"] = _segment_dicts(block.left, bold=True)
        view["right"] = block.right.replace("**", "") if block.right else None
    elif kind != "blank":
        view["segments"] = _segment_dicts(block.text_content, bold=settings.style_for(style).bold)

    return view


class PreviewRenderer:
    """
    Jinja2 renderer for HTML resume previews.

    Args:
        settings: Layout settings supplying geometry and the style table
        templates_path: Directory holding preview templates
    """

    def __init__(
        self,
        settings: Optional[LayoutSettings] = None,
        templates_path: Optional[Path] = None,
    ):
        self.settings = settings or LayoutSettings()
        self.templates_path = templates_path or TEMPLATES_PATH
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def get_template(self, name: str = PREVIEW_TEMPLATE) -> Template:
        """
        Raises:
            TemplateNotFound: If template file doesn't exist
        """
        try:
            return self.env.get_template(name)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Preview template not found at {self.templates_path / name}"
            ) from e

    def render(self, blocks: Iterable[Block], title: Optional[str] = None) -> str:
        """Render blocks to a standalone HTML page."""
        blocks = list(blocks)
        if title is None:
            names = [block.text for block in blocks if isinstance(block, Name)]
            title = names[0] if names else "Resume preview"

        return self.get_template().render(
            title=title,
            blocks=[block_view(block, self.settings) for block in blocks],
            geometry=self.settings.geometry,
            settings=self.settings,
            styles=self.settings.styles,
            font_family=self.settings.font_family,
            separator=self.settings.contact_separator,
        )
