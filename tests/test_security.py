# tests/test_security.py
from core.security import Identity


def test_nonce_valid_in_current_half_life(nonces, admin):
    nonce = nonces.create("book_save_meta_box", admin)
    assert nonces.verify(nonce, "book_save_meta_box", admin) == 1


def test_nonce_valid_in_previous_half_life(nonces, clock, admin):
    nonce = nonces.create("book_save_meta_box", admin)
    clock.advance(nonces.lifetime / 2)
    assert nonces.verify(nonce, "book_save_meta_box", admin) == 2


def test_nonce_expires(nonces, clock, admin):
    nonce = nonces.create("book_save_meta_box", admin)
    clock.advance(nonces.lifetime)
    assert nonces.verify(nonce, "book_save_meta_box", admin) == 0


def test_nonce_is_bound_to_action_and_user(nonces, admin, editor):
    nonce = nonces.create("book_save_meta_box", admin)
    assert nonces.verify(nonce, "other_action", admin) == 0
    assert nonces.verify(nonce, "book_save_meta_box", editor) == 0
    assert nonces.verify("", "book_save_meta_box", admin) == 0
    assert nonces.verify(None, "book_save_meta_box", admin) == 0


def test_edit_post_depends_on_owner(author, editor):
    assert author.can("edit_post", author.user_id)
    assert not author.can("edit_post", editor.user_id)
    assert editor.can("edit_post", author.user_id)


def test_role_capabilities(admin, editor, subscriber):
    assert admin.can("manage_options")
    assert not editor.can("manage_options")
    assert subscriber.can("read")
    assert not subscriber.can("edit_posts")


def test_anonymous_identity():
    anonymous = Identity.anonymous()
    assert not anonymous.is_logged_in
    assert not anonymous.can("read")
    assert not Identity.for_role(9, "unknown-role").can("read")
