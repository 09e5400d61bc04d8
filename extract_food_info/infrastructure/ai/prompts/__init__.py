"""Prompt templates for OpenAI calls."""
