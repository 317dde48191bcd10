"""
Oddball - Balance Scale Puzzle Engine

A deterministic engine for the odd-ball weighing puzzle: one ball among
a set is heavier or lighter than the rest, and the player finds it with
a two-pan balance scale. The engine provides:
- Ball set generation with a hidden anomaly
- Scale pan management
- Weighing evaluation and result history
- Guess verification
"""

__version__ = "0.1.0"
