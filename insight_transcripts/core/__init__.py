"""Core segmentation, annotation, and IR modules.

WHY: The core package is the algorithmic heart of the engine: the IR
dataclasses, caption cleaning, paragraph segmentation, and highlight
annotation. Everything else (CLI, HTTP API, formatters) only calls into it.

HOW: ir.py defines the data structures, cleaner.py normalizes fragment
text, segmenter.py folds fragments into paragraphs, annotator.py overlays
highlights, timestamps.py renders seek labels, highlights.py manages
highlight lists, sources.py recognizes source URLs.

RULES:
- Nothing here touches the network or the filesystem
- Paragraph boundaries are a persisted contract; change thresholds with care
"""
