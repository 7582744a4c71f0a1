"""
Tic-Tac-Toe - Game State Machine and Heuristic AI

A deterministic engine for 3x3 tic-tac-toe in two modes:
- Player vs Player
- Player vs a fixed-priority heuristic AI

The engine owns all state and returns render-ready snapshots.
Presentation (terminal, HTTP) only forwards user intents.
"""

__version__ = "0.1.0"
