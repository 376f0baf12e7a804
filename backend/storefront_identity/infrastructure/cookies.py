"""Set-Cookie rendering shared by the session and cart adapters."""

from http.cookies import SimpleCookie


def set_cookie_header(
    name: str,
    value: str,
    *,
    max_age: int,
    path: str = "/",
    http_only: bool = True,
    secure: bool = True,
    same_site: str = "lax",
) -> str:
    """Render one Set-Cookie header value. max_age <= 0 deletes the cookie."""
    cookie: SimpleCookie = SimpleCookie()
    cookie[name] = value
    morsel = cookie[name]
    morsel["path"] = path
    morsel["max-age"] = max(max_age, 0)
    morsel["samesite"] = same_site
    if http_only:
        morsel["httponly"] = True
    if secure:
        morsel["secure"] = True
    return morsel.OutputString()
