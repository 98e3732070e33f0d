"""
HTTP layer: FastAPI routers and per-request wiring.
"""
