"""HTTP routers mounted by :func:`flagbook.api.app.create_app`."""
