"""HTTP surface for the seed pipeline."""

from seed.server.app import app, create_app

__all__ = ["app", "create_app"]
