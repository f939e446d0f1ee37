"""
Document renderer.

Consumes the canonical block sequence and produces a paginated Document:
each block picks its style profile, is tokenized and wrapped against the font
metric, and every resulting line is placed through the Paginator.

A renderer holds only configuration; every call to `render()` builds its own
paginator and primitive list, so one renderer can serve concurrent conversions.
"""

from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from folio.contexts.layout.blocks import (
    Blank,
    Block,
    Bullet,
    ContactLine,
    Headline,
    Name,
    Paragraph,
    SectionHeader,
    SubsectionHeader,
)
from folio.contexts.layout.document import (
    Document,
    HorizontalRule,
    LinkRegion,
    PageInfo,
    Primitive,
    TextRun,
)
from folio.contexts.layout.inline_styles import StyledSegment, strip_delimiters, tokenize
from folio.contexts.layout.logger import log_layout_result
from folio.contexts.layout.pagination import Paginator
from folio.contexts.layout.section_patterns import detect_link
from folio.contexts.layout.styles import LayoutSettings, StyleProfile, points_to_mm
from folio.contexts.layout.text_flow import MeasureFn, WrappedLine, measure_with, wrap

DEFAULT_FILENAME = "optimized-faang-resume.pdf"
FILENAME_SUFFIX = "_modified.pdf"


def output_filename(original_filename: Optional[str] = None) -> str:
    """
    Derive the output PDF name from the uploaded file's name.

    Examples:
        >>> output_filename("jane_resume.docx")
        'jane_resume_modified.pdf'
        >>> output_filename(None)
        'optimized-faang-resume.pdf'
    """
    if not original_filename:
        return DEFAULT_FILENAME
    return f"{Path(original_filename).stem}{FILENAME_SUFFIX}"


def _force_bold(segments: Sequence[StyledSegment], bold: bool) -> List[StyledSegment]:
    if not bold:
        return list(segments)
    return [StyledSegment(segment.text, True) for segment in segments]


class _RenderPass:
    """Mutable state of one render() call."""

    def __init__(self, settings: LayoutSettings, measure_fn: MeasureFn):
        self.settings = settings
        self.measure_fn = measure_fn
        self.geometry = settings.geometry
        self.paginator = Paginator(page_height=self.geometry.height, margin=self.geometry.margin)
        self.primitives: List[Primitive] = []

    @property
    def left(self) -> float:
        return self.geometry.margin

    @property
    def printable_width(self) -> float:
        return self.geometry.printable_width

    def baseline(self, top: float, line_height: float, font_size: float) -> float:
        return top + line_height - points_to_mm(font_size) * self.settings.descent_ratio

    def measure(self, text: str, bold: bool, font_size: float) -> float:
        return measure_with(self.measure_fn, text, bold, font_size)

    def wrap_text(self, text: str, style: StyleProfile, max_width: float) -> List[WrappedLine]:
        segments = _force_bold(tokenize(text), style.bold)
        return wrap(
            segments,
            max_width=max_width,
            font_size=style.font_size,
            measure_fn=self.measure_fn,
            line_height=style.line_height,
        )

    def draw_line(self, line: WrappedLine, x: float, baseline: float) -> None:
        page = self.paginator.page_number
        for segment in line.segments:
            if not segment.text.strip():
                continue
            self.primitives.append(
                TextRun(
                    page=page,
                    x=x + segment.x_offset,
                    y=baseline,
                    text=segment.text,
                    font_size=line.font_size,
                    bold=segment.bold,
                    width=segment.width,
                )
            )

    def place_lines(
        self,
        lines: Sequence[WrappedLine],
        style: StyleProfile,
        x: float,
        available_width: float,
        on_first_line: Optional[Callable[[float], None]] = None,
    ) -> List[Tuple[int, float]]:
        """
        Reserve space for each line and draw it.

        on_first_line(baseline) runs once the first line has its page and
        baseline, before that line is drawn.

        Returns:
            (page, baseline) for every placed line
        """
        placements = []
        for index, line in enumerate(lines):
            keep = style.keep_with_next if index == 0 else 0.0
            top = self.paginator.reserve(line.height, keep_with_next=keep)
            baseline = self.baseline(top, line.height, line.font_size)

            line_x = x
            if style.align == "center" and line.width < available_width:
                line_x = x + (available_width - line.width) / 2

            if index == 0 and on_first_line is not None:
                on_first_line(baseline)
            self.draw_line(line, line_x, baseline)
            placements.append((self.paginator.page_number, baseline))
        return placements

    def text_run(
        self, text: str, x: float, baseline: float, style: StyleProfile, bold: bool, width: float
    ) -> TextRun:
        return TextRun(
            page=self.paginator.page_number,
            x=x,
            y=baseline,
            text=text,
            font_size=style.font_size,
            bold=bold,
            width=width,
        )


class DocumentRenderer:
    """
    Lay out classified blocks onto A4 pages.

    Args:
        measure_fn: measure_fn(text, bold, font_size) -> width in mm
        settings: Layout settings (defaults: A4, 20mm margins, default style table)

    Example:
        >>> from folio.contexts.rendering.metrics import helvetica_metrics
        >>> renderer = DocumentRenderer(helvetica_metrics)
        >>> document = renderer.render(blocks, filename="resume.docx")
        >>> document.filename
        'resume_modified.pdf'
    """

    def __init__(self, measure_fn: MeasureFn, settings: Optional[LayoutSettings] = None):
        self.measure_fn = measure_fn
        self.settings = settings or LayoutSettings()
        self._handlers: Dict[type, Callable[[_RenderPass, Block], None]] = {
            Blank: self._place_blank,
            Name: self._place_centered,
            Headline: self._place_centered,
            ContactLine: self._place_contact_line,
            SectionHeader: self._place_section_header,
            SubsectionHeader: self._place_subsection_header,
            Bullet: self._place_bullet,
            Paragraph: self._place_paragraph,
        }

    def render(self, blocks: Iterable[Block], filename: Optional[str] = None) -> Document:
        """
        Lay out blocks in order and return the finished Document.

        Raises:
            MeasurementError: If the font metric fails
        """
        render_pass = _RenderPass(self.settings, self.measure_fn)

        for block in blocks:
            handler = self._handlers.get(type(block))
            if handler is None:
                raise TypeError(f"Cannot lay out block of type {type(block).__name__}")
            handler(render_pass, block)

        document = Document(
            pages=tuple(
                PageInfo(index=page.index, cursor_y=page.cursor_y, used_height=page.used_height)
                for page in render_pass.paginator.pages
            ),
            primitives=tuple(render_pass.primitives),
            geometry=self.settings.geometry,
            filename=output_filename(filename),
            font_family=self.settings.font_family,
        )
        log_layout_result(document)
        return document

    # =========================================================================
    # Block handlers
    # =========================================================================

    def _place_blank(self, render_pass: _RenderPass, block: Blank) -> None:
        if block.gap:
            render_pass.paginator.skip(self.settings.blank_gap)

    def _place_centered(self, render_pass: _RenderPass, block: Block) -> None:
        """Name and headline: wrapped, every line centered."""
        style = self.settings.style_for(block.kind)
        render_pass.paginator.skip(style.space_before)
        lines = render_pass.wrap_text(block.text_content, style, render_pass.printable_width)
        render_pass.place_lines(lines, style, render_pass.left, render_pass.printable_width)
        render_pass.paginator.skip(style.space_after)

    def _place_paragraph(self, render_pass: _RenderPass, block: Paragraph) -> None:
        style = self.settings.style_for("bold_paragraph" if block.bold else "paragraph")
        render_pass.paginator.skip(style.space_before)
        lines = render_pass.wrap_text(block.text, style, render_pass.printable_width)
        render_pass.place_lines(lines, style, render_pass.left, render_pass.printable_width)
        render_pass.paginator.skip(style.space_after)

    def _place_bullet(self, render_pass: _RenderPass, block: Bullet) -> None:
        """Glyph at the margin, wrapped text indented by bullet_indent."""
        style = self.settings.style_for(block.kind)
        indent = self.settings.bullet_indent
        text_width = render_pass.printable_width - indent
        glyph = self.settings.bullet_glyph

        def draw_glyph(baseline: float) -> None:
            render_pass.primitives.append(
                render_pass.text_run(
                    glyph,
                    render_pass.left,
                    baseline,
                    style,
                    False,
                    render_pass.measure(glyph, False, style.font_size),
                )
            )

        render_pass.paginator.skip(style.space_before)
        lines = render_pass.wrap_text(block.text, style, text_width)
        render_pass.place_lines(
            lines, style, render_pass.left + indent, text_width, on_first_line=draw_glyph
        )
        render_pass.paginator.skip(style.space_after)

    def _place_section_header(self, render_pass: _RenderPass, block: SectionHeader) -> None:
        """Header text followed by a rule across the printable width."""
        style = self.settings.style_for(block.kind)
        paginator = render_pass.paginator

        paginator.skip(style.space_before)
        lines = render_pass.wrap_text(block.name, style, render_pass.printable_width)
        render_pass.place_lines(lines, style, render_pass.left, render_pass.printable_width)

        rule_top = paginator.reserve(self.settings.rule_gap)
        render_pass.primitives.append(
            HorizontalRule(
                page=paginator.page_number,
                x_start=render_pass.left,
                x_end=render_pass.left + render_pass.printable_width,
                y=rule_top + self.settings.rule_gap / 2,
                thickness=self.settings.rule_thickness,
            )
        )
        paginator.skip(style.space_after)

    def _place_subsection_header(self, render_pass: _RenderPass, block: SubsectionHeader) -> None:
        """Left part wrapped from the margin; right part right-aligned on the first baseline."""
        style = self.settings.style_for(block.kind)
        paginator = render_pass.paginator
        printable = render_pass.printable_width

        right_text = strip_delimiters(block.right) if block.right else ""
        right_width = render_pass.measure(right_text, True, style.font_size) if right_text else 0.0

        left_width = printable
        if right_text:
            left_width = max(printable - right_width - self.settings.subsection_gutter, printable / 3)

        def draw_right(baseline: float) -> None:
            if right_text:
                render_pass.primitives.append(
                    render_pass.text_run(
                        right_text,
                        max(render_pass.left, render_pass.left + printable - right_width),
                        baseline,
                        style,
                        True,
                        right_width,
                    )
                )

        paginator.skip(style.space_before)
        lines = render_pass.wrap_text(block.left, style, left_width)

        if lines:
            render_pass.place_lines(
                lines, style, render_pass.left, left_width, on_first_line=draw_right
            )
        else:
            top = paginator.reserve(style.line_height, keep_with_next=style.keep_with_next)
            draw_right(render_pass.baseline(top, style.line_height, style.font_size))
        paginator.skip(style.space_after)

    def _place_contact_line(self, render_pass: _RenderPass, block: ContactLine) -> None:
        """
        Centered `part | part | part` with link regions for emails and URLs.

        Parts never break internally; when they do not fit on one line they
        continue on further centered lines.
        """
        style = self.settings.style_for(block.kind)
        paginator = render_pass.paginator
        separator = self.settings.contact_separator
        size = style.font_size

        parts = [(part, render_pass.measure(part, False, size)) for part in block.parts]
        if not parts:
            return
        separator_width = render_pass.measure(separator, False, size)

        paginator.skip(style.space_before)
        for row in self._group_contact_parts(parts, separator_width, render_pass.printable_width):
            row_width = sum(width for _, width in row) + separator_width * (len(row) - 1)
            top = paginator.reserve(style.line_height)
            baseline = render_pass.baseline(top, style.line_height, size)

            x = render_pass.left
            if row_width < render_pass.printable_width:
                x += (render_pass.printable_width - row_width) / 2

            for index, (part, width) in enumerate(row):
                if index > 0:
                    render_pass.primitives.append(
                        render_pass.text_run(separator, x, baseline, style, False, separator_width)
                    )
                    x += separator_width

                render_pass.primitives.append(render_pass.text_run(part, x, baseline, style, False, width))
                url = detect_link(part)
                if url:
                    render_pass.primitives.append(
                        LinkRegion(
                            page=paginator.page_number,
                            x=x,
                            y=top,
                            width=width,
                            height=style.line_height,
                            url=url,
                        )
                    )
                x += width
        paginator.skip(style.space_after)

    @staticmethod
    def _group_contact_parts(
        parts: List[Tuple[str, float]], separator_width: float, max_width: float
    ) -> List[List[Tuple[str, float]]]:
        rows: List[List[Tuple[str, float]]] = [[]]
        row_width = 0.0
        for part, width in parts:
            if rows[-1] and row_width + separator_width + width > max_width:
                rows.append([])
                row_width = 0.0
            if rows[-1]:
                row_width += separator_width
            rows[-1].append((part, width))
            row_width += width
        return rows
