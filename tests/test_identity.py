"""Tests for author identity variants and resolvers."""

from authorship.identity import (
    EmailAuthor,
    EmailIdentityResolver,
    RegisteredAuthor,
    StaticIdentityResolver,
    UnresolvedAuthor,
    author_key,
    identity_email,
    identity_uid,
)


class TestIdentityFields:
    def test_registered(self):
        ident = RegisteredAuthor(uid=7, email="a@x.io")
        assert identity_uid(ident) == 7
        assert identity_email(ident) == "a@x.io"

    def test_registered_without_email(self):
        ident = RegisteredAuthor(uid=7)
        assert identity_uid(ident) == 7
        assert identity_email(ident) is None

    def test_email_only(self):
        ident = EmailAuthor("a@x.io")
        assert identity_uid(ident) is None
        assert identity_email(ident) == "a@x.io"

    def test_unresolved(self):
        ident = UnresolvedAuthor()
        assert identity_uid(ident) is None
        assert identity_email(ident) is None


class TestAuthorKey:
    def test_registered_keyed_by_uid(self):
        home = RegisteredAuthor(uid=7, email="a@home.io")
        work = RegisteredAuthor(uid=7, email="a@work.io")
        assert author_key(home) == author_key(work) == "uid:7"

    def test_email_only(self):
        assert author_key(EmailAuthor("a@x.io")) == "email:a@x.io"

    def test_unresolved(self):
        assert author_key(UnresolvedAuthor()) == "unresolved:"


class TestEmailIdentityResolver:
    def test_email(self):
        assert EmailIdentityResolver().resolve("a@x.io") == EmailAuthor("a@x.io")

    def test_empty_email_unresolved(self):
        assert isinstance(EmailIdentityResolver().resolve(""), UnresolvedAuthor)


class TestStaticIdentityResolver:
    def test_known_user(self):
        resolver = StaticIdentityResolver({"a@x.io": 1})
        assert resolver.resolve("a@x.io") == RegisteredAuthor(uid=1, email="a@x.io")

    def test_keys_normalized(self):
        resolver = StaticIdentityResolver({"  A@X.io ": 1})
        assert resolver.resolve("a@x.io").uid == 1

    def test_unknown_falls_back_to_email(self):
        resolver = StaticIdentityResolver({"a@x.io": 1})
        assert resolver.resolve("b@x.io") == EmailAuthor("b@x.io")
