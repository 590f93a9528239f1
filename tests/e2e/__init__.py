"""End-to-end tests driving the docs-mirror CLI.

Journeys run the Typer application through CliRunner inside a temporary
project directory. Remote endpoints are served by httpx.MockTransport.
"""
