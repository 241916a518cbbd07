"""FastAPI routes and endpoints.

Endpoints:
- GET /health: Service health status
- GET /ready: Readiness probe (lexicon loaded)
- POST /v1/stem: Batch stemming
- GET /v1/stem/{term}: Single-term stemming
- GET /v1/lexicon: Lexicon build statistics
"""
