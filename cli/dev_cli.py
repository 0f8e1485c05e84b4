import argparse
import logging
import sys
from dotenv import load_dotenv

from emoji_picker.catalog import EmojiCatalog
from emoji_picker.config import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    EMOJI_DATA_PATH,
    ORDERED_NAMES_PATH,
)
from emoji_picker.errors import CatalogLoadError
from emoji_picker.server import start_server
from emoji_picker.server_client import is_server_running

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# load env
load_dotenv()


def handle_fetch(args):
    """Populate the local emoji cache, optionally replacing what's there."""
    if args.force:
        logger.info("Refetching emoji data, existing cache is kept until the download succeeds")

    catalog = EmojiCatalog(refresh=args.force)
    try:
        catalog.ensure_available()
    except CatalogLoadError as e:
        logger.error(f"Fetching emoji data failed: {e}")
        print(f"❌ {e}")
        return False

    print(f"✅ {len(catalog.load())} emojis cached at {EMOJI_DATA_PATH}")
    if catalog.ordered_names():
        print(f"📋 Display order cached at {ORDERED_NAMES_PATH}")
    return True


def handle_server(args):
    logger.info(f"Starting emoji picker on {args.host}:{args.port}")
    return start_server(host=args.host, port=args.port, debug=args.debug)


def handle_server_status(args):
    server_running, server_info = is_server_running(args.url)
    if server_running:
        print(f"✅ Server is running")
        print(f"😀 Emojis loaded: {server_info.get('emojis', 0)}")
    else:
        print("❌ Server is not running")
        print("💡 Start with: emoji-picker start-server")
    return server_running


def main(argv=None):
    parser = argparse.ArgumentParser(description='Emoji Picker CLI')
    subparsers = parser.add_subparsers(dest='command', help='Commands', required=True)

    fetch_parser = subparsers.add_parser('fetch', help='Download the emoji dataset into the local cache')
    fetch_parser.add_argument('--force', action='store_true', help='Replace existing cache files')

    server_parser = subparsers.add_parser("start-server", help="Start the emoji picker server")
    server_parser.add_argument("--host", type=str, default=DEFAULT_HOST, help="Host address (default: %(default)s)")
    server_parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port number (default: %(default)s)")
    server_parser.add_argument("--debug", action="store_true", help="Run in debug mode")

    status_parser = subparsers.add_parser("server-status", help="Check server status")
    status_parser.add_argument("--url", type=str, help="Server URL (default: EMOJI_PICKER_URL or local server)")

    args = parser.parse_args(argv)

    if args.command == 'fetch': ok = handle_fetch(args)
    elif args.command == 'start-server': ok = handle_server(args)
    elif args.command == 'server-status': ok = handle_server_status(args)

    if not ok:
        sys.exit(1)

if __name__ == '__main__':
    main()
