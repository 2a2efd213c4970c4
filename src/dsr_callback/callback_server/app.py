"""Flask application receiving DSR callbacks."""

import logging
import signal
import sys
import threading
from datetime import datetime, timezone

from flask import Flask, Response, jsonify, request

from ..soap.dispatcher import NotificationSink, dispatch
from ..soap.envelope import SOAP_CONTENT_TYPES, parse_envelope
from ..soap.responses import RESPONSE_CONTENT_TYPE
from .config import CallbackServerConfig, load_config
from .rendering import CallbackRenderer

SERVER_MESSAGE = "DSR Callback Server is running"

# Server state tracking
_server_start_time: datetime | None = None
_request_count: int = 0
# The dev server handles requests on worker threads
_request_count_lock = threading.Lock()
_sink: NotificationSink | None = CallbackRenderer()

# Create Flask app
app = Flask(__name__)

logger = logging.getLogger("dsr_callback.callback_server")


def plain_text(message: str, http_status: int) -> tuple[Response, int]:
    """Build a plain-text (non-SOAP) error response."""
    return Response(message, mimetype="text/plain"), http_status


@app.before_request
def log_request():
    """Log all incoming requests."""
    global _request_count
    with _request_count_lock:
        _request_count += 1
        request_number = _request_count

    logger.info(
        f"Request #{request_number}: {request.method} {request.path} "
        f"(Content-Length: {request.content_length or 0})"
    )

    # Log request body at DEBUG level
    if request.method == "POST" and logger.isEnabledFor(logging.DEBUG):
        body = request.get_data(as_text=True)
        logger.debug(f"Request body: {body[:500]}...")  # Truncate for readability


@app.route("/", methods=["GET"])
def index():
    """Root status endpoint."""
    return jsonify({
        "status": "ok",
        "message": SERVER_MESSAGE,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }), 200


@app.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint.

    Returns JSON with status, message, timestamp, uptime and request count.
    """
    uptime_seconds = 0
    if _server_start_time:
        uptime_seconds = int((datetime.now(timezone.utc) - _server_start_time).total_seconds())

    return jsonify({
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": SERVER_MESSAGE,
        "uptime_seconds": uptime_seconds,
        "request_count": _request_count,
    }), 200


@app.route("/", methods=["POST"], defaults={"path": ""})
@app.route("/<path:path>", methods=["POST"])
def handle_callback(path: str) -> tuple[Response, int]:
    """Handle a DSR callback posted to any path.

    Returns:
        Tuple of (Response object, HTTP status code)
    """
    try:
        soap_action = (
            request.headers.get("Action")
            or request.headers.get("SOAPAction")
            or "unknown"
        )
        logger.info(f"Received request to: {request.path}")
        logger.info(f"SOAPAction: {soap_action}")

        body = b""
        charset = None
        if request.mimetype in SOAP_CONTENT_TYPES:
            body = request.get_data()
            charset = request.mimetype_params.get("charset")
        else:
            logger.warning(f"Unsupported content type: {request.mimetype or 'none'}")

        envelope = parse_envelope(body, encoding=charset)
        if envelope is None:
            logger.warning("Failed to parse SOAP envelope")
            return plain_text("Invalid SOAP", 400)

        result = dispatch(envelope, sink=_sink)

        logger.debug(f"SOAP response:\n{result.response_xml}")
        return Response(result.response_xml, content_type=RESPONSE_CONTENT_TYPE), 200

    except Exception as e:
        logger.error(f"Error processing callback: {e}", exc_info=True)
        return plain_text("Internal Server Error", 500)


@app.errorhandler(500)
def internal_error(error):
    """Handle 500 Internal Server errors with a plain-text body."""
    logger.error(f"Unhandled server error: {error}")
    return plain_text("Internal Server Error", 500)


def setup_graceful_shutdown():
    """Setup graceful shutdown handlers for SIGTERM and SIGINT.

    Note: Signal handlers can only be registered in the main thread.
    In test scenarios or when running in background threads, this will
    log a warning but continue gracefully.
    """
    def shutdown_handler(signum, frame):
        logger.info(f"Received shutdown signal ({signum}), shutting down DSR Callback Server...")
        sys.exit(0)

    try:
        signal.signal(signal.SIGTERM, shutdown_handler)
        signal.signal(signal.SIGINT, shutdown_handler)
        logger.debug("Graceful shutdown handlers registered successfully")
    except ValueError as e:
        # Signal registration only works in main thread
        logger.warning(
            f"Could not register signal handlers (not in main thread): {e}. "
            f"Graceful shutdown via signals will not be available."
        )


def initialize_app(config: CallbackServerConfig) -> None:
    """Initialize the Flask app with configuration.

    Args:
        config: Callback server configuration
    """
    global _server_start_time, _request_count, _sink
    _server_start_time = datetime.now(timezone.utc)
    with _request_count_lock:
        _request_count = 0
    _sink = CallbackRenderer() if config.render_callbacks else None

    logger.info("Callback server application initialized")


def run_server(
    config: CallbackServerConfig | None = None,
    debug: bool = False
) -> None:
    """Run the Flask callback server.

    Args:
        config: Callback server configuration (loaded from file and environment if not provided)
        debug: Enable debug mode (default: False)

    Raises:
        OSError: If the server cannot listen on the configured port
    """
    if config is None:
        config = load_config()

    initialize_app(config)
    setup_graceful_shutdown()

    logger.info(f"Callback Testing Server Started, listening on port {config.port}")
    logger.info(f"Health check available at: http://{config.host}:{config.port}/health")
    logger.info("Waiting for callbacks...")

    app.run(
        host=config.host,
        port=config.port,
        debug=debug,
        use_reloader=False  # Disable reloader to avoid duplicate startup
    )
