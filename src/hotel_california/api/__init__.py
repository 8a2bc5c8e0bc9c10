"""
hotel_california.api

API package for the Hotel California service.

Responsibilities:
- FastAPI app factory and router modules.
- The request pipeline every endpoint runs through.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: decoding, validation and auth, then delegation to services.
