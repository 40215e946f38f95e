"""
Web application package for the Magnus chess engine.

Provides a FastAPI-based REST API that the browser chess client calls for
the engine's moves.
"""
