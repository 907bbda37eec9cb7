"""FastAPI dashboard application factory with Jinja2 templates and WebSocket hub."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from scanner.dashboard.routes import api, pages, ws
from scanner.dashboard.routes.ws import DashboardHub

TEMPLATES_DIR = Path(__file__).parent / "templates"

TRADE_URL = "https://app.hyperliquid.xyz/trade/{symbol}"

_TAG_ICONS = {
    "Pumping": "🚀",
    "Dumping": "📉",
    "High Funding": "🔥",
    "Neg Funding": "❄️",
    "High Turnover": "⚡",
    "Overheated": "🌡️",
    "Short Squeeze Risk": "❄️",
    "High Volume": "💰",
}


def _format_number(value: float | None, decimals: int = 2) -> str:
    """Thousands-separated number with at most ``decimals`` fraction digits."""
    if value is None:
        return "0"
    text = f"{value:,.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_usd(value: float | None) -> str:
    """Compact USD amount (e.g. '$1.2B', '$340.5M', '$12K')."""
    if value is None:
        return "$0"
    if value >= 1_000_000_000:
        return f"${_format_number(value / 1_000_000_000)}B"
    if value >= 1_000_000:
        return f"${_format_number(value / 1_000_000)}M"
    if value >= 1_000:
        return f"${_format_number(value / 1_000)}K"
    return f"${_format_number(value)}"


def _format_price(value: float) -> str:
    """Sub-dollar prices get five decimals, everything else two."""
    return f"${_format_number(value, 5 if value < 1 else 2)}"


def _format_signed(value: float, decimals: int = 2) -> str:
    prefix = "+" if value >= 0 else ""
    return f"{prefix}{_format_number(value, decimals)}"


def _signal_strength(score: float) -> str:
    """Render a score as 1-5 lightning bolts (one per 5 points, capped)."""
    return "⚡" * min(max(math.ceil(score / 5), 0), 5)


def _tag_label(tag: str) -> str:
    icon = _TAG_ICONS.get(tag)
    return f"{icon} {tag}" if icon else tag


def _trade_url(symbol: str) -> str:
    return TRADE_URL.format(symbol=symbol)


def create_dashboard_app(lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI dashboard application.

    Args:
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to inject startup/shutdown logic.

    Returns:
        Configured FastAPI application with templates, WebSocket hub, and routes.
        ``app.state.signal_service`` must be set before serving requests.
    """
    app = FastAPI(
        title="Perp Signal Scanner",
        lifespan=lifespan,
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["fmt_number"] = _format_number
    templates.env.filters["fmt_usd"] = _format_usd
    templates.env.filters["fmt_price"] = _format_price
    templates.env.filters["fmt_signed"] = _format_signed
    templates.env.filters["signal_strength"] = _signal_strength
    templates.env.filters["tag_label"] = _tag_label
    templates.env.filters["trade_url"] = _trade_url
    app.state.templates = templates

    app.state.hub = DashboardHub()
    app.state.signal_service = None
    app.state.refresh_interval = 30

    app.include_router(pages.router)
    app.include_router(api.router, prefix="/api")
    app.include_router(ws.router)

    return app
