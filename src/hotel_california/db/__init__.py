"""
hotel_california.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, repositories, and the persistence gateway.
"""

# Package marker.
