"""Tokenizer, matcher, cache and index services."""
