"""HTTP session management for the Orion NCM configuration dumper."""

from http.cookiejar import DefaultCookiePolicy

import requests
import urllib3

from .config import USER_AGENT


def build_session(verify_ssl: bool = False) -> requests.Session:
    """
    Return the process-wide requests.Session used for every call.

    No retry adapter is mounted: a failed request is reported, never replayed.
    TLS verification is off unless *verify_ssl* is set.

    The session jar refuses every cookie: the login cookies are passed
    explicitly on each call and anything the console sets later is dropped.
    """
    session = requests.Session()
    session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
    session.verify = verify_ssl
    if not verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Connection": "keep-alive",
    })
    return session


def base_url(host: str, port: str | None = None, use_tls: bool = False) -> str:
    """
    Build the console base URL.

    *host* may already carry a ``:port`` suffix; *port* is only appended
    when given.
    """
    scheme = "https" if use_tls else "http"
    if port:
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"
