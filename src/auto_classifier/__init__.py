"""
Auto Classifier: note classification pipeline.

Classifies free-form note text against reference labels (or proposes new
ones) through one of two interchangeable backends:
- Generative chat (OpenAI-compatible /chat/completions), validated by a
  JSON parse + reliability gate
- Zero-shot classification (Jina-style /classify), ranked by score

Classified labels are written back into the note as tags, wikilinks,
frontmatter values or the title.

Architecture: orchestrator + pluggable engines + host protocols for the
document/editor side.
"""

__version__ = "0.1.0"
