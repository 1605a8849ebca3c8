"""Hosting adapters that expose the chat request handler over HTTP."""
