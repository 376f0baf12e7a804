"""Storefront Identity Package — customer authentication, session and address book.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
