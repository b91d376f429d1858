"""
Type definitions used across layers
"""

from enum import StrEnum


class Phase(StrEnum):
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"
