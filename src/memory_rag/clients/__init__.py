"""Thin async SDK helpers for the OpenAI and Ollama backends."""
