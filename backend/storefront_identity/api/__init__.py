"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Success paths redirect with Set-Cookie headers; failures return 400 payloads
      shaped {formError} or {fieldErrors}

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
