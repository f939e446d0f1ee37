"""
FOLIO - Formatted Output Layout for Interview-Optimized resumes

Turns the markdown-like resume text produced by an upstream optimizer into a
paginated, styled A4 document.

Architecture:
- Layout Context: Line classification, inline styling, text flow and pagination
- Rendering Context: Font metrics, PDF output, screen preview and PDF validation
"""

__version__ = "0.1.0"
