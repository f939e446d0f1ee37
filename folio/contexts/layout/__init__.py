"""
Layout Context

Responsibilities:
- Classifies raw resume lines into semantic blocks (name, headline, sections, bullets, ...)
- Resolves inline **bold** emphasis into styled segments
- Wraps text against an injected font metric
- Paginates placed lines onto fixed A4 pages

Owns: Block model, style table, wrapping, pagination, the laid-out Document
Never: Touches fonts, files or PDF bytes (the metric and backend are injected)
"""

from folio.contexts.layout.blocks import (
    Blank,
    Block,
    Bullet,
    ClassifierState,
    ContactLine,
    Headline,
    Name,
    Paragraph,
    SectionHeader,
    SubsectionHeader,
)
from folio.contexts.layout.classifier import classify
from folio.contexts.layout.document import Document, HorizontalRule, LinkRegion, TextRun
from folio.contexts.layout.exceptions import FolioError, MeasurementError
from folio.contexts.layout.inline_styles import StyledSegment, tokenize
from folio.contexts.layout.normalizer import (
    NormalizationResult,
    SectionNormalizer,
    normalize_resume,
    to_markdown,
)
from folio.contexts.layout.pagination import Paginator
from folio.contexts.layout.renderer import DocumentRenderer, output_filename
from folio.contexts.layout.styles import LayoutSettings, StyleProfile
from folio.contexts.layout.text_flow import WrappedLine, wrap
