import requests
import os
from dotenv import load_dotenv

from emoji_picker.config import DEFAULT_HOST, DEFAULT_PORT

load_dotenv()
DEFAULT_SERVER_URL = os.getenv('EMOJI_PICKER_URL', f'http://{DEFAULT_HOST}:{DEFAULT_PORT}')

def is_server_running(server_url=None, timeout=5):
    """Check if the emoji picker server is running."""
    if server_url is None:
        server_url = DEFAULT_SERVER_URL

    try:
        response = requests.get(f"{server_url}/health", timeout=timeout)
        if response.status_code == 200:
            return True, response.json()
        return False, None
    except (requests.exceptions.ConnectionError, requests.exceptions.Timeout):
        return False, None
