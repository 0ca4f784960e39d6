"""LLM client and prompt templates."""
