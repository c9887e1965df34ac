"""
Category entity. Seeded at store construction, immutable afterwards.
"""

from dataclasses import dataclass


@dataclass
class Category:
    id: int
    name: str
    icon: str
    color: str = "primary"
