"""Stemming: letter classes, word buffer, suffix rules and the stem driver."""
