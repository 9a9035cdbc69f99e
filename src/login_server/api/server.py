"""
FastAPI application for the login server.

Builds the app around a ``LoginPipeline`` and runs it under uvicorn, on the
plain HTTP listener or, when ``[tls] enabled`` is set, on the HTTPS listener.
"""

import logging

from fastapi import FastAPI

from login_server import __version__
from login_server.api.routes import register_routes
from login_server.core.pipeline import LoginPipeline, create_login_pipeline

logger = logging.getLogger(__name__)


def create_app(pipeline: LoginPipeline | None = None) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        pipeline: Login pipeline to serve; built from configuration when omitted.
    """
    app = FastAPI(title="Login Server", version=__version__, docs_url=None, redoc_url=None)
    register_routes(app, pipeline or create_login_pipeline())
    return app


def start_server(host: str | None = None, port: int | None = None) -> None:
    """
    Run the server with uvicorn.

    Args:
        host: Interface to bind. Defaults to ``[server] host``.
        port: Port to bind. Defaults to the port of the active listener.

    Note:
        The game client rejects self-signed certificates outright (the TLS
        handshake is aborted), so HTTPS needs a CA-signed certificate.
    """
    import uvicorn

    from login_server.config import config, configure_logging

    configure_logging()
    host = host or config.server.host
    port = port or config.listen_port

    ssl_options: dict[str, str] = {}
    if config.tls.enabled:
        ssl_options = {
            "ssl_certfile": str(config.tls.cert_path),
            "ssl_keyfile": str(config.tls.key_path),
        }
        logger.info("Login server (HTTPS) listening on %s:%s", host, port)
    else:
        logger.info("Login server (HTTP) listening on %s:%s", host, port)

    uvicorn.run(create_app(), host=host, port=port, log_config=None, **ssl_options)
