from flask import current_app

from .ai_chat import AiChatClient
from .google_oauth import GoogleOAuthClient
from .mailer import Mailer
from .storage import LocalStorage

EXTENSION_KEY = "healthsync.clients"


def init_clients(app):
    """Build the external service clients from config and attach them to the app.

    Tests swap entries in ``app.extensions[EXTENSION_KEY]`` for fakes.
    """
    app.extensions[EXTENSION_KEY] = {
        "ai_chat": AiChatClient.from_config(app.config),
        "google": GoogleOAuthClient.from_config(app.config),
        "mailer": Mailer.from_config(app.config),
        "storage": LocalStorage.from_config(app.config, app.root_path),
    }


def get_client(name):
    return current_app.extensions[EXTENSION_KEY][name]
