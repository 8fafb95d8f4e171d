"""
Shared data models.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    msg: str
