from __future__ import annotations

from foodstack_orders.bootstrap import create_asgi_app

app = create_asgi_app()
