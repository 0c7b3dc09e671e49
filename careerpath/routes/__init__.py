"""
FastAPI routers for all API endpoints.

Each module defines a router for one domain (profile, career recommendations, health).
"""
