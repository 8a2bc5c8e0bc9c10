"""
hotel_california.auth

Authentication package.

Responsibilities:
- JWT issuing and signature validation.
- `AuthGuard`: bearer token -> `Principal`, with expiry enforcement.
"""

# Package marker.
