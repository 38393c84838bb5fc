"""Browser-facing chart API.

Usage::

    from tgph import load_store
    from tgph.visual import Dashboard, serve

    dashboard = Dashboard(load_store("data.tgph.gz"))
    dashboard.add_chart("CPU", ["CPU Usage"])
    serve(dashboard)
"""

from __future__ import annotations

import webbrowser

from tgph.visual.dashboard import Dashboard, Panel

__all__ = ["Dashboard", "Panel", "serve"]


def serve(
    dashboard: Dashboard,
    *,
    host: str = "127.0.0.1",
    port: int = 8765,
    open_browser: bool = False,
) -> None:
    """Serve ``dashboard`` over HTTP until interrupted (Ctrl+C).

    Args:
        dashboard: Panels to expose.
        host: Bind address.
        port: Bind port.
        open_browser: Open the default browser at the API root.
    """
    try:
        import uvicorn
    except ImportError:
        raise ImportError(
            "Serving charts requires extra dependencies.\n"
            "Install them with:  pip install tgph-charts[visual]"
        ) from None

    from tgph.visual.server import create_app

    app = create_app(dashboard)
    url = f"http://{host}:{port}/docs"
    if open_browser:
        webbrowser.open(url)
    uvicorn.run(app, host=host, port=port, log_level="warning")
