"""Services Layer — async orchestration of core logic around remote IO.

Invariants:
    - Services receive collaborators as arguments (no module-level clients)
    - Mutation failures leave IdentityGateway as structured results; reads raise
      typed errors (SessionExpiredError, RemoteAPIError) for the global handlers
"""
