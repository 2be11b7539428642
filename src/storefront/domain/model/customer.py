"""Customer aggregate.

Order placement only needs to know that a customer exists; the name is
kept for display.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Customer:
    id: str
    name: str
