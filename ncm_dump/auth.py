"""
ncm_dump.auth
=============
Forms-authentication login against the Orion web console.

The console answers a successful credential POST with a 302 that carries the
``.ASPXAUTH`` cookie.  Following that redirect lands on the NCM page and the
cookie is no longer visible on the final response, so redirects are never
followed here: the cookies of the *first* response are the session.
"""

import requests
from requests.cookies import RequestsCookieJar

from .config import AUTH_COOKIE_MARKER, LOGIN_PATH, REQUEST_TIMEOUT
from .errors import AuthenticationError, OrionConnectionError
from .logging_setup import log


def login_form(username: str, password: str) -> dict[str, str]:
    """Return the ASP.NET login form fields for *username* / *password*."""
    return {
        "ctl00$BodyContent$Username": username,
        "ctl00$BodyContent$Password": password,
        "__EVENTTARGET": "",
    }


def serialize_cookies(cookies: RequestsCookieJar) -> str:
    """Render a cookie jar as ``name=value; Path=...; Domain=...`` records."""
    records = []
    for cookie in cookies:
        record = f"{cookie.name}={cookie.value}"
        if cookie.path:
            record += f"; Path={cookie.path}"
        if cookie.domain:
            record += f"; Domain={cookie.domain}"
        if cookie.secure:
            record += "; Secure"
        records.append(record)
    return " ".join(records)


def has_auth_cookie(cookies: RequestsCookieJar) -> bool:
    return AUTH_COOKIE_MARKER in serialize_cookies(cookies)


def login(
    session: requests.Session, base: str, username: str, password: str
) -> RequestsCookieJar:
    """
    Authenticate against the console at *base*.

    Returns the cookie jar of the login response; pass it to every later
    call.  Raises OrionConnectionError when the console cannot be reached
    and AuthenticationError when no auth cookie was issued.
    """
    url = base + LOGIN_PATH
    try:
        resp = session.post(
            url,
            data=login_form(username, password),
            timeout=REQUEST_TIMEOUT,
            allow_redirects=False,
        )
    except requests.RequestException as exc:
        raise OrionConnectionError(f"Connection failed to {base}: {exc}") from exc

    log.debug("Login response HTTP %s, Location: %s",
              resp.status_code, resp.headers.get("Location"))
    log.debug("Login cookies: %s", serialize_cookies(resp.cookies))

    if not has_auth_cookie(resp.cookies):
        raise AuthenticationError(
            f"Login failed for {base} as {username!r}",
            status_code=resp.status_code,
        )

    log.info("Login successful for %s", base)
    return resp.cookies
