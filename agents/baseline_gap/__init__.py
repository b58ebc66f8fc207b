"""
Baseline Gap Agent Package

A simple heuristic agent that flaps whenever it is falling below the next
gap's target height. Serves as a benchmark and example.
"""

from .agent import FlappyAgent, create_agent

__all__ = ["FlappyAgent", "create_agent"]
