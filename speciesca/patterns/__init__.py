"""Seed layouts and glyph-text patterns."""

from .seeds import CLUSTER_OFFSETS, parse_pattern, seed_demo_layout

__all__ = [
    'CLUSTER_OFFSETS',
    'parse_pattern',
    'seed_demo_layout',
]
