"""
Column type helpers shared by entity modules.
"""

from __future__ import annotations

from enum import Enum
from typing import Type

from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum


def enum_column(enum_cls: Type[Enum], name: str) -> SAEnum:
    """Build a SQL enum type that persists member values rather than member names."""
    return SAEnum(enum_cls, name=name, values_callable=lambda members: [m.value for m in members])


TIMESTAMP = DateTime(timezone=True)
