"""
hotel_california.api.routers

HTTP routers; each route hands its request to the pipeline with a static `Operation`.
"""

# Package marker.
