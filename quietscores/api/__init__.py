"""HTTP surface for the presentation layer."""

from quietscores.api.app import create_app

__all__ = ["create_app"]
