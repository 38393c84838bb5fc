"""Serve snapshot charts over HTTP.

Collect a few samples first:
    tgph-collect --output data.tgph.gz --interval-seconds 1 --count 30

Then launch with:
    python examples/serve_dashboard.py data.tgph.gz

Opens the API docs at http://127.0.0.1:8765/docs. Every network interface
found in the snapshot gets its own half-size panel.
"""

import sys

from tgph import load_store
from tgph.visual import Dashboard, serve

store = load_store(sys.argv[1] if len(sys.argv) > 1 else "data.tgph.gz")
dashboard = Dashboard(store)

dashboard.add_chart("CPU", ["CPU Usage"])
dashboard.add_chart("Memory", ["Total memory [MB]", "Used memory [MB]"])
for container in store.by_name_contains("Received [bytes]"):
    iface = container.name.removesuffix(" Received [bytes]")
    dashboard.add_chart(
        iface,
        [container.name, f"{iface} Transmitted [bytes]"],
        half_size=True,
    )

serve(dashboard, open_browser=True)
