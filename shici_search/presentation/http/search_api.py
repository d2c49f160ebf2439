"""
Flask-based HTTP entry point for the search service.

Provides /health and /search endpoints over the registered document
types.
"""

import dataclasses
import logging
import os
from typing import Optional

from flask import Flask, jsonify, request

from ...application.services.search_application_service import SearchApplicationService
from ...core.entities import DOCUMENT_TYPES
from ...shared.exceptions.search_exceptions import SearchEngineError, SearchError, SearchTransportError

logger = logging.getLogger(__name__)

_MAX_QUERY_LENGTH = 200
_MIN_LIMIT = 1


def create_app(
    search_service: SearchApplicationService,
    default_index: str = "shici",
    default_max_results: int = 20,
    max_results_limit: int = 100
) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        search_service: Search service used by the endpoints
        default_index: Index searched when the request names none
        default_max_results: Result cap when the request gives none
        max_results_limit: Upper bound for the requested result cap

    Returns:
        Flask: The application
    """
    app = Flask(__name__)

    @app.route("/health", methods=["GET"])
    def health():
        """Health check endpoint: is the default index reachable."""
        try:
            exists = search_service.index_exists(default_index)
        except SearchError as e:
            return jsonify({"status": "unhealthy", "error": e.message}), 503
        return jsonify({"status": "healthy" if exists else "degraded", "index": default_index}), 200

    @app.route("/search", methods=["POST"])
    def search_endpoint():
        """Search endpoint accepting a JSON body with tokens or a query string."""
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        tokens = data.get("tokens")
        query_text: Optional[str] = None
        if tokens is None:
            query = data.get("query", "")
            if not isinstance(query, str):
                return jsonify({"error": "query must be a string"}), 400
            query_text = query.strip()
            if len(query_text) > _MAX_QUERY_LENGTH:
                return jsonify({"error": f"Query exceeds max length of {_MAX_QUERY_LENGTH}"}), 400
            if not query_text:
                return jsonify({"error": "Missing 'query' or 'tokens' field"}), 400
        elif not isinstance(tokens, list) or not all(isinstance(t, str) for t in tokens):
            return jsonify({"error": "tokens must be a list of strings"}), 400
        elif not any(t.strip() for t in tokens):
            return jsonify({"error": "Missing 'query' or 'tokens' field"}), 400

        type_name = data.get("type", "Poem")
        document_type = DOCUMENT_TYPES.get(type_name) if isinstance(type_name, str) else None
        if document_type is None:
            return jsonify({"error": f"type must be one of: {', '.join(sorted(DOCUMENT_TYPES))}"}), 400

        try:
            limit = int(data.get("max_results", default_max_results))
        except (ValueError, TypeError):
            return jsonify({"error": "max_results must be an integer"}), 400
        limit = max(_MIN_LIMIT, min(limit, max_results_limit))

        index = data.get("index") or default_index
        try:
            if query_text is not None:
                results = search_service.search_text(index, document_type, query_text, limit)
            else:
                results = search_service.search(index, document_type, tokens, limit)
        except SearchEngineError as e:
            logger.warning(f"Search failed: {e}")
            return jsonify({"error": e.to_dict()}), 502
        except SearchTransportError as e:
            logger.warning(f"Search engine unreachable: {e}")
            return jsonify({"error": e.to_dict()}), 503

        return jsonify({
            "results": [dataclasses.asdict(doc) for doc in results],
            "count": len(results)
        })

    return app


def main(config_dir: Optional[str] = None) -> None:
    """Entry point for the search HTTP service."""
    from ...infrastructure.config.config_manager import ConfigManager
    from ...infrastructure.search.factory import SearchFactory

    config = ConfigManager(config_dir=config_dir).get_config()
    app = create_app(
        SearchFactory(config).create_search_service(),
        default_index=config.get_default_index(),
        default_max_results=config.get_default_max_results(),
        max_results_limit=config.get_max_results_limit()
    )

    port = int(os.getenv("SHICI_SEARCH_PORT", "8000"))
    host = os.getenv("SHICI_SEARCH_HOST", "0.0.0.0")
    debug = os.getenv("FLASK_DEBUG", "0") == "1"
    logger.info(f"Starting search service on {host}:{port}")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
