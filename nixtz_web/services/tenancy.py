from __future__ import annotations

from flask import current_app, request

ORG_HEADER = "X-Org-Id"


def current_org() -> str:
    """Organization the request acts on: header, then ``?org=``, then the configured default."""
    org = request.headers.get(ORG_HEADER) or request.args.get("org")
    if org and org.strip():
        return org.strip()
    return current_app.config["DEFAULT_ORG"]
