"""Root conftest — shared test configuration."""

import os

# Ensure tests never talk to a real shop or reuse a real signing secret
os.environ.setdefault("STOREFRONT_DOMAIN", "test-shop.myshopify.com")
os.environ.setdefault("STOREFRONT_PUBLIC_TOKEN", "test-public-token")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
# httpx test client talks plain http; Secure cookies would never be sent back
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")
os.environ.setdefault("LOG_FORMAT", "text")
