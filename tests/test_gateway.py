import pytest

from app.utils.errors import NotFoundError, Unauthorized, ValidationError


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com", "pw")


@pytest.fixture
def token(session_store, owner):
    return session_store.issue(owner.id)


def test_unauthorized_before_any_file_operation(gateway, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("file tree must not be reached")

    for name in ("create", "get_by_id", "list"):
        monkeypatch.setattr(gateway.file_tree, name, fail)

    for bad_token in (None, "", "unknown"):
        with pytest.raises(Unauthorized):
            gateway.create(bad_token, "x", "folder")
        with pytest.raises(Unauthorized):
            gateway.get(bad_token, 1)
        with pytest.raises(Unauthorized):
            gateway.list(bad_token)


def test_create_uses_session_owner(gateway, token, owner):
    folder = gateway.create(token, "docs", "folder")
    assert folder.owner_id == owner.id


def test_revoked_and_expired_tokens(gateway, session_store, fake_redis, owner):
    revoked = session_store.issue(owner.id)
    session_store.revoke(revoked)
    with pytest.raises(Unauthorized):
        gateway.list(revoked)

    expired = session_store.issue(owner.id)
    fake_redis.advance(86400)
    with pytest.raises(Unauthorized):
        gateway.list(expired)


def test_get_hides_other_users_files(gateway, session_store, make_user, token):
    file = gateway.create(token, "a.txt", "file", content=b"a")
    intruder = make_user("intruder@example.com", "pw")
    intruder_token = session_store.issue(intruder.id)
    with pytest.raises(NotFoundError):
        gateway.get(intruder_token, file.id)
    assert gateway.get(token, file.id).id == file.id


def test_read_content_private(gateway, session_store, make_user, token):
    file = gateway.create(token, "notes.txt", "file", content=b"private notes")
    assert gateway.read_content(token, file.id) == (b"private notes", "text/plain")
    with pytest.raises(NotFoundError):
        gateway.read_content(None, file.id)
    intruder = make_user("intruder@example.com", "pw")
    with pytest.raises(NotFoundError):
        gateway.read_content(session_store.issue(intruder.id), file.id)


def test_read_content_public_needs_no_session(gateway, token):
    file = gateway.create(token, "blob", "file", is_public=True, content=b"\x00\x01")
    assert gateway.read_content(None, file.id) == (b"\x00\x01", "application/octet-stream")


def test_read_content_of_folder(gateway, token):
    folder = gateway.create(token, "docs", "folder", is_public=True)
    with pytest.raises(ValidationError, match="A folder doesn't have content"):
        gateway.read_content(token, folder.id)


def test_read_content_thumbnails(gateway, token):
    image = gateway.create(token, "pic.png", "image", content=b"full")
    with open(f"{image.local_path}_250", "wb") as thumbnail:
        thumbnail.write(b"small")
    assert gateway.read_content(token, image.id, 250) == (b"small", "image/png")
    with pytest.raises(NotFoundError):
        gateway.read_content(token, image.id, 500)
    with pytest.raises(NotFoundError):
        gateway.read_content(token, image.id, 42)


def test_raw_parent_ids_are_read_after_authentication(gateway, token):
    folder = gateway.create(token, "docs", "folder")
    child = gateway.create(token, "a", "folder", parent_id=str(folder.id))
    assert child.parent_id == folder.id
    assert [f.name for f in gateway.list(token, "0")] == ["docs"]
    assert [f.name for f in gateway.list(token, str(folder.id))] == ["a"]
    assert gateway.list(token, "nope") == []
    with pytest.raises(Unauthorized):
        gateway.list(None, "nope")
