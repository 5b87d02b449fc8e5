"""linear-ai-cli: convert free-form text into Linear issues."""

__version__ = "1.0.0"
