"""Prompt Construction Package"""

from changeset_ai.prompts.builder import PromptBuilder, RESPONSE_SCHEMA

__all__ = ["PromptBuilder", "RESPONSE_SCHEMA"]
