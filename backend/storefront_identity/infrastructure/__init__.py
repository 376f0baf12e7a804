"""Infrastructure Layer — IO adapters for the storefront API, cookies and logging.

Invariants:
    - Adapters implement the Protocols in core/boundary_protocols.py
    - Remote failures are mapped to RemoteAPIError here and nowhere else
"""
