"""HTTP surface of the login server."""
