"""Prompt Curator: a small service for curating text-to-image prompts."""
