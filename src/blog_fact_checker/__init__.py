"""Fact-check Webflow blog posts and publish highlighted corrections."""

__version__ = "0.1.0"
