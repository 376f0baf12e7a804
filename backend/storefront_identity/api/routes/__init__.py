"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with tags
    - Every storefront route is reachable with and without a locale prefix
    - Routes never contain business logic (delegate to services)
"""
