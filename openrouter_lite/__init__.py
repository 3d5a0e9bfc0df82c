"""Minimal client for the OpenRouter chat completions API."""
