import pytest
from flask_jwt_extended import create_access_token

from healthsync import create_app
from healthsync.clients import EXTENSION_KEY
from healthsync.clients.storage import LocalStorage
from healthsync.errors import AiServiceError, UnauthorizedError
from healthsync.extensions import db
from healthsync.permissions import ROLE_ADMIN
from healthsync.seed import seed_all
from healthsync.services.accounts import create_account


class FakeMailer:
    def __init__(self):
        self.sent = []

    def send_verification_code(self, to, code):
        self.sent.append(("verification", to, code))

    def send_reset_otp(self, to, otp):
        self.sent.append(("reset", to, otp))

    def last_code(self, kind, to):
        for sent_kind, email, code in reversed(self.sent):
            if sent_kind == kind and email == to:
                return code
        return None


class FakeAiChat:
    def __init__(self, answer="Drink more water and keep training."):
        self.answer = answer
        self.calls = []
        self.fail = False

    def complete(self, system_prompt, question):
        self.calls.append((system_prompt, question))
        if self.fail:
            raise AiServiceError("Error calling AI service: connection refused")
        return self.answer


class FakeGoogle:
    """Maps codes and id tokens to Google profile dicts."""

    def __init__(self):
        self.identities = {}

    def authorization_url(self, state=""):
        return f"https://accounts.google.test/auth?state={state}"

    def _lookup(self, key):
        if key not in self.identities:
            raise UnauthorizedError("Invalid Google token")
        return self.identities[key]

    def exchange_code(self, code):
        return self._lookup(code)

    def verify_id_token(self, id_token):
        return self._lookup(id_token)


@pytest.fixture
def app(tmp_path):
    app = create_app("testing")
    app.extensions[EXTENSION_KEY].update({
        "mailer": FakeMailer(),
        "ai_chat": FakeAiChat(),
        "google": FakeGoogle(),
        "storage": LocalStorage(str(tmp_path / "uploads"), "/static/uploads"),
    })

    with app.app_context():
        db.create_all()
        seed_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mailer(app):
    return app.extensions[EXTENSION_KEY]["mailer"]


@pytest.fixture
def ai_chat(app):
    return app.extensions[EXTENSION_KEY]["ai_chat"]


@pytest.fixture
def google(app):
    return app.extensions[EXTENSION_KEY]["google"]


@pytest.fixture
def make_user(app):
    def _make(email, password="secret123", full_name="Test User", role=None):
        user = create_account(
            email,
            password,
            full_name=full_name,
            role_name=role or "Customer",
            email_confirmed=True,
        )
        db.session.commit()
        return user
    return _make


@pytest.fixture
def customer(make_user):
    return make_user("casey@example.com", full_name="Casey Customer")


@pytest.fixture
def other_customer(make_user):
    return make_user("olly@example.com", full_name="Olly Other")


@pytest.fixture
def admin(make_user):
    return make_user("ada@example.com", full_name="Ada Admin", role=ROLE_ADMIN)


@pytest.fixture
def headers_for(app):
    def _headers(user):
        token = create_access_token(identity=str(user.id))
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def auth_headers(customer, headers_for):
    return headers_for(customer)


@pytest.fixture
def admin_headers(admin, headers_for):
    return headers_for(admin)
