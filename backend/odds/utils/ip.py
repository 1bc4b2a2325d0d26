from __future__ import annotations

from flask import Request


def get_client_ip(request: Request, trust_headers: bool = True) -> str:
    """Best-effort client address, used to tag request logs."""
    if trust_headers:
        for header in ("CF-Connecting-IP", "X-Real-IP"):
            value = request.headers.get(header)
            if value:
                return value.strip()

        xff = request.headers.get("X-Forwarded-For")
        if xff:
            parts = [p.strip() for p in xff.split(",") if p.strip()]
            if parts:
                return parts[0]

    return request.remote_addr or "unknown"
