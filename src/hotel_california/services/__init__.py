"""
hotel_california.services

Service-layer package (reservation rule engine).

Responsibilities:
- Pure business rules (`rules`).
- Account and reservation use cases over the persistence gateway.
"""

# Package marker.
