import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_api import email_service, recaptcha
from clinic_api.config import Settings, get_settings
from clinic_api.database import Base, get_db
from clinic_api.main import app

# ------------------ engine ------------------
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        RESEND_API_KEY="re_test_key",
        ADMIN_EMAIL="admin@centrodebelleza.test, recepcion@centrodebelleza.test",
        FROM_EMAIL="Centro de Belleza <turnos@centrodebelleza.test>",
        RECAPTCHA_SECRET_KEY="recaptcha-secret",
    )


@pytest.fixture
def client(db, settings):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sent_emails(monkeypatch):
    """Capture Resend calls instead of sending"""
    sent = []

    def fake_send(params):
        sent.append(params)
        return {"id": f"email-{len(sent)}"}

    monkeypatch.setattr(email_service.resend.Emails, "send", staticmethod(fake_send))
    monkeypatch.setattr(email_service, "compile_mjml_to_html", lambda mjml: mjml)
    return sent


@pytest.fixture
def recaptcha_score(monkeypatch):
    """Make reCAPTCHA answer with a chosen score; returns a setter and the list of tokens seen"""
    state = {"score": 0.9, "success": True, "tokens": []}

    async def fake_verify(token, secret_key, ip=None):
        state["tokens"].append(token)
        return recaptcha.RecaptchaResult(success=state["success"], score=state["score"])

    monkeypatch.setattr(recaptcha, "verify_recaptcha", fake_verify)
    return state
