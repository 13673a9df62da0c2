"""Reporting package — Markdown debrief generation."""

from sentinel_mind.reporting.markdown import MarkdownReporter

__all__ = ["MarkdownReporter"]
