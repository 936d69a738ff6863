"""Prompt template engine: placeholder scanning, validation, rendering and extraction."""
