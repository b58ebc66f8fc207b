"""
Flappy Package
==============

A flappy-style arcade game: one avatar falling under gravity, pipe pairs
scrolling in from the right, a difficulty ramp driven by the score and a
persistent best score.

Tunable parameters live in game_config.yaml.
"""
