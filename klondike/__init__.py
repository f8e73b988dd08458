"""
Klondike - Solitaire Rule Engine

A deterministic, rules-driven engine for single-player Klondike.
The engine owns the authoritative board and provides:
- Seeded shuffle and deal
- Move validation with structured rejection reasons
- Move execution with automatic card flips and stock recycling
- Undo history
- Win / stuck detection
"""

__version__ = "0.1.0"
