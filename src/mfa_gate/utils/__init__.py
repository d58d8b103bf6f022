"""Shared utilities (file loading, JSONL logging)."""
