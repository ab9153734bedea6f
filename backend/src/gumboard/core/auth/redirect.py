"""Post-sign-in redirect policy.

Only same-origin URLs and invitation links are honoured; everything else
lands on the dashboard. This keeps the callback URL from being used as an
open redirect.
"""

from urllib.parse import urlsplit

INVITE_ACCEPT_PATH = "/invite/accept"
DASHBOARD_PATH = "/dashboard"


def _origin(url: str) -> str | None:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def resolve_redirect(target_url: str, base_url: str) -> str:
    """Pick where to send the user after authentication.

    Rules, in order:
    1. Invitation-acceptance targets are kept. Relative ones are prefixed
       with ``base_url``; absolute ones must share its origin.
    2. Any other relative target goes to the dashboard.
    3. Absolute targets on the same origin are returned unchanged.
    4. Everything else goes to the dashboard.

    Args:
        target_url: The callback URL requested by the client.
        base_url: Public origin of this deployment, e.g. ``https://app.example``.

    Returns:
        Absolute URL to redirect to.
    """
    base_url = base_url.rstrip("/")
    dashboard = f"{base_url}{DASHBOARD_PATH}"

    try:
        base_origin = _origin(base_url)
        target_origin = None if target_url.startswith("/") else _origin(target_url)
    except ValueError:
        return dashboard

    if INVITE_ACCEPT_PATH in target_url:
        if target_url.startswith("/"):
            return f"{base_url}{target_url}"
        if target_origin is not None and target_origin == base_origin:
            return target_url
        return dashboard

    if target_url.startswith("/"):
        return dashboard

    if target_origin is not None and target_origin == base_origin:
        return target_url

    return dashboard
