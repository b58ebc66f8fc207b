"""
Agents Package
==============

Policies that play the game through the Gymnasium environment.
"""
