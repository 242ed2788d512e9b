from bibliodesk.session import ROLE_ADMIN, ROLE_LIBRARIAN, SessionContext, SessionStore


def test_anonymous_session():
    session = SessionContext.anonymous()

    assert not session.is_authenticated
    assert not session.is_admin
    assert session.display_name == ""


def test_display_name_joins_available_parts():
    session = SessionContext(token="t", user_id="42", first_name="Mercè", surname="Rodoreda")

    assert session.is_authenticated
    assert session.display_name == "Mercè Rodoreda"


def test_display_name_falls_back_to_user_id():
    assert SessionContext(user_id="42").display_name == "42"


def test_roles():
    assert SessionContext(role=ROLE_ADMIN).is_admin
    assert not SessionContext(role=ROLE_LIBRARIAN).is_admin


def test_store_starts_with_given_or_anonymous_session():
    assert SessionStore().current == SessionContext.anonymous()
    admin = SessionContext(token="t", role=ROLE_ADMIN)
    assert SessionStore(admin).current is admin


def test_store_sign_in_and_out():
    store = SessionStore()
    session = SessionContext(token="t", user_id="2")

    store.sign_in(session)
    assert store.current is session

    ended = store.sign_out()
    assert ended is session
    assert not store.current.is_authenticated
