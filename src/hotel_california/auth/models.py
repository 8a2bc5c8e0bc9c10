"""
hotel_california.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) handed to services.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity: the user id carried in the token subject.
    """

    id: int


# --- Module Notes -----------------------------------------------------------
# Principals are derived from tokens on every call and never persisted.
