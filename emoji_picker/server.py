from flask import Flask, request, jsonify, render_template, make_response, current_app
import logging
import signal
import sys

from emoji_picker.catalog import EmojiCatalog
from emoji_picker.config import DEFAULT_HOST, DEFAULT_PORT, TONE_COOKIE, TONE_COOKIE_MAX_AGE
from emoji_picker.errors import CatalogLoadError, InvalidSkinToneError
from emoji_picker.tones import (
    modifier_for_index,
    modifier_for_key,
    retone,
    skin_tone_selections,
    tone_index_from_cookie,
)

logger = logging.getLogger(__name__)


def search_terms(name, keywords):
    """Joins emoji name and keywords into the string the search box matches against."""
    return " ".join([name.replace("_", " "), *keywords]).strip().lower()


def get_catalog() -> EmojiCatalog:
    return current_app.config["EMOJI_CATALOG"]


def create_app(catalog=None):
    """Build the picker app around ``catalog``.

    The catalog isn't loaded here; call ``catalog.ensure_available()`` first
    for eager startup, otherwise the first request loads it.
    """
    app = Flask(__name__)
    app.config["EMOJI_CATALOG"] = catalog if catalog is not None else EmojiCatalog()
    app.jinja_env.filters["search_terms"] = search_terms

    @app.errorhandler(CatalogLoadError)
    def catalog_unavailable(e):
        logger.error(f"Emoji catalog unavailable: {e}")
        return jsonify({"status": "error", "error": "Emoji catalog unavailable"}), 500

    @app.route('/health', methods=['GET'])
    def health_check():
        catalog = get_catalog()
        return jsonify({
            "status": "ok",
            "loaded": catalog.loaded,
            "emojis": len(catalog.load()) if catalog.loaded else 0,
        })

    @app.route('/', methods=['GET'])
    def index():
        catalog = get_catalog()
        selections = skin_tone_selections()

        # skin tone preference, falls back to the plain hand
        tone = tone_index_from_cookie(request.cookies.get(TONE_COOKIE))
        emojis = retone(catalog.load(), modifier_for_index(tone))

        return render_template(
            "index.html",
            groups=catalog.grouped(emojis),
            categories=catalog.categories(),
            skin_tone_selections=selections,
            hand=selections[tone],
        )

    @app.route('/fetch-skin-tones', methods=['GET'])
    def fetch_skin_tones():
        try:
            tone, modifier = modifier_for_key(request.args.get('skintone'))
        except InvalidSkinToneError as e:
            return jsonify({"status": "error", "error": str(e)}), 400

        catalog = get_catalog()
        emojis = retone(catalog.load(), modifier)

        response = make_response(render_template("emojis.html", groups=catalog.grouped(emojis)))
        # update cookie with skin tone preference
        response.set_cookie(TONE_COOKIE, str(tone), max_age=TONE_COOKIE_MAX_AGE)
        return response

    return app


def start_server(catalog=None, host=DEFAULT_HOST, port=DEFAULT_PORT, debug=False):
    """Start the emoji picker server with a pre-loaded catalog."""
    catalog = catalog if catalog is not None else EmojiCatalog()

    print("Loading emoji catalog...")
    try:
        catalog.ensure_available()
    except CatalogLoadError as e:
        logger.error(f"Cannot start without an emoji catalog: {e}")
        print(f"Error: {e}")
        return False

    print(f"Catalog loaded with {len(catalog.load())} emojis.")
    print(f"Starting server on {host}:{port}...")
    print("Press Ctrl+C to stop the server")

    # Handle graceful shutdown
    def signal_handler(sig, frame):
        print("\nShutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    app = create_app(catalog)
    app.run(host=host, port=port, debug=debug, threaded=True)
    return True


if __name__ == '__main__':
    import argparse
    parser = argparse.ArgumentParser(description="Emoji Picker Server")
    parser.add_argument("--host", type=str, default=DEFAULT_HOST, help="Host to run the server on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port to run the server on")
    parser.add_argument("--debug", action="store_true", help="Run in debug mode")

    args = parser.parse_args()
    if not start_server(host=args.host, port=args.port, debug=args.debug):
        sys.exit(1)
