"""Category aggregate."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Category:
    id: str
    name: str
    slug: str
    description: str = ""
    is_active: bool = True
