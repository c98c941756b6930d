"""
Runtime package for the Color Changer skill server.

This package contains:
- API layer (FastAPI server + routes)
- Agents (request routing + session state machine)
- Stores (sessions, event logs)
- Models (Pydantic models for requests, responses and sessions)
"""
