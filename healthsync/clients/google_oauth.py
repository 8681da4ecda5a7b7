import logging
from urllib.parse import urlencode

import requests

from healthsync.errors import UnauthorizedError

logger = logging.getLogger(__name__)

AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"


class GoogleOAuthClient:

    def __init__(self, client_id, client_secret, redirect_uri, android_client_id=None, timeout=30):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.android_client_id = android_client_id
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        return cls(
            config.get("GOOGLE_CLIENT_ID"),
            config.get("GOOGLE_CLIENT_SECRET"),
            config.get("GOOGLE_REDIRECT_URI"),
            config.get("GOOGLE_ANDROID_CLIENT_ID"),
        )

    def authorization_url(self, state=""):
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "access_type": "online",
            "prompt": "select_account",
        }
        if state:
            params["state"] = state
        return f"{AUTH_URL}?{urlencode(params)}"

    def exchange_code(self, code):
        """Trade an authorization code for the Google user's info dict."""
        try:
            token_response = requests.post(
                TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                },
                timeout=self.timeout
            )
            token_response.raise_for_status()
            access_token = token_response.json().get("access_token")
            if not access_token:
                raise UnauthorizedError("Invalid Google authorization code")

            info_response = requests.get(
                USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self.timeout
            )
            info_response.raise_for_status()
            info = info_response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Google code exchange failed: {e}")
            raise UnauthorizedError("Invalid Google authorization code") from e
        return self._normalize(info)

    def verify_id_token(self, id_token):
        try:
            response = requests.get(TOKENINFO_URL, params={"id_token": id_token}, timeout=self.timeout)
            response.raise_for_status()
            info = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Google id token verification failed: {e}")
            raise UnauthorizedError("Invalid Google token") from e

        audiences = {a for a in (self.client_id, self.android_client_id) if a}
        if audiences and info.get("aud") not in audiences:
            raise UnauthorizedError("Google token was issued for another client")
        return self._normalize(info)

    @staticmethod
    def _normalize(info):
        email = (info.get("email") or "").strip().lower()
        if not email:
            raise UnauthorizedError("Google account has no email")
        return {
            "email": email,
            "name": info.get("name") or email,
            "picture": info.get("picture") or "",
        }
