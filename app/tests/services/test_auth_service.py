from app.core.security import decode_token
from app.services.auth_service import AuthService


def test_login_opens_session_and_issues_token(db, make_user):
    maria = make_user("Maria", email="maria@example.com")

    token, session = AuthService().login(db, email="maria@example.com", password="senha123")

    payload = decode_token(token)
    assert payload["sub"] == str(maria.id)
    assert payload["sid"] == str(session.id)
    assert payload["display_name"] == "Maria"
    assert session.is_active


def test_login_rejects_bad_credentials(db, make_user):
    make_user("Maria", email="maria@example.com")
    svc = AuthService()

    assert svc.login(db, email="maria@example.com", password="errada") is None
    assert svc.login(db, email="ninguem@example.com", password="senha123") is None


def test_logout_revokes_session(db, make_user):
    make_user("Maria", email="maria@example.com")
    svc = AuthService()
    _token, session = svc.login(db, email="maria@example.com", password="senha123")

    assert svc.logout(db, session.id) is True
    assert svc.get_active_session(db, session.id) is None
    assert svc.logout(db, session.id) is False
