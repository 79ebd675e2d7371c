"""Prompt Engineer - craft tailored prompts with an LLM."""

__version__ = "0.1.0"
