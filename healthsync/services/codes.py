import secrets
import threading
from datetime import datetime, timedelta


class CodeStore:
    """Process-local store of short numeric codes keyed by email.

    A code is valid until it expires or is consumed. Issuing a new code for
    an email replaces the previous one.
    """

    def __init__(self, ttl, length=6):
        self.ttl = ttl if isinstance(ttl, timedelta) else timedelta(seconds=ttl)
        self.length = length
        self._codes = {}
        self._lock = threading.Lock()

    def issue(self, email, now=None):
        now = now or datetime.utcnow()
        code = "".join(secrets.choice("0123456789") for _ in range(self.length))
        with self._lock:
            self._codes[email.lower()] = (code, now + self.ttl)
        return code

    def _matches(self, key, code, now):
        entry = self._codes.get(key)
        if not entry:
            return False
        stored, expires_at = entry
        if expires_at < now:
            del self._codes[key]
            return False
        return secrets.compare_digest(stored, str(code).strip())

    def check(self, email, code, now=None):
        with self._lock:
            return self._matches(email.lower(), code, now or datetime.utcnow())

    def consume(self, email, code, now=None):
        """Check a code and remove it when it matches."""
        key = email.lower()
        with self._lock:
            if not self._matches(key, code, now or datetime.utcnow()):
                return False
            del self._codes[key]
            return True


def get_store(app, name, ttl):
    """Return the app's named code store, creating it on first use."""
    key = f"healthsync.codes.{name}"
    store = app.extensions.get(key)
    if store is None:
        store = app.extensions.setdefault(key, CodeStore(ttl))
    return store
