"""Synchronise per-language JSON translation catalogues."""
