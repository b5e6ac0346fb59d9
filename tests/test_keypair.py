from datetime import datetime, timedelta

import pytest
import pytz

from pyld_integrity import contexts
from pyld_integrity.errors import (
    ContextMismatchError, ExportError, InitializationError, KeypairError,
    RevokedKeyError)
from pyld_integrity.keypair import Ed25519Multikey, P256Multikey

from conftest import ALICE, make_keypair


def test_seeded_keys_are_deterministic():
    first = make_keypair(Ed25519Multikey)
    second = make_keypair(Ed25519Multikey)
    assert first.generate_fingerprint() == second.generate_fingerprint()

    other = make_keypair(Ed25519Multikey, seed=bytes(32))
    assert other.generate_fingerprint() != first.generate_fingerprint()


def test_fingerprint_prefixes(ed25519_keypair, p256_keypair):
    # multibase "z" plus the multicodec header of each key type
    assert ed25519_keypair.generate_fingerprint().startswith("z6Mk")
    assert p256_keypair.generate_fingerprint().startswith("zDn")


def test_verify_fingerprint(ed25519_keypair):
    fingerprint = ed25519_keypair.generate_fingerprint()
    assert ed25519_keypair.verify_fingerprint(fingerprint)

    other = make_keypair(Ed25519Multikey, seed=bytes(32))
    assert not ed25519_keypair.verify_fingerprint(
        other.generate_fingerprint())
    assert not ed25519_keypair.verify_fingerprint("not multibase at all")
    assert not ed25519_keypair.verify_fingerprint(None)


def test_default_id_uses_controller_and_fingerprint(ed25519_keypair):
    assert ed25519_keypair.id == "%s#%s" % (
        ALICE, ed25519_keypair.generate_fingerprint())

    ed25519_keypair.id = "did:example:alice#key-1"
    assert ed25519_keypair.id == "did:example:alice#key-1"


def test_type_is_read_only(ed25519_keypair):
    assert ed25519_keypair.type == "Multikey"
    with pytest.raises(AttributeError):
        ed25519_keypair.type = "JsonWebKey"


def test_wrong_seed_length():
    with pytest.raises(InitializationError):
        make_keypair(Ed25519Multikey, seed=b"too short")


def test_random_initialization():
    keypair = Ed25519Multikey(controller=ALICE)
    keypair.initialize()
    assert keypair.has_private_key()
    assert keypair.has_public_key()


def test_export_public(ed25519_keypair):
    exported = ed25519_keypair.export()
    assert exported["type"] == "Multikey"
    assert exported["controller"] == ALICE
    assert exported["id"] == ed25519_keypair.id
    assert exported["publicKeyMultibase"] == (
        ed25519_keypair.generate_fingerprint())
    assert not "secretKeyMultibase" in exported
    assert contexts.SECURITY_CONTEXT_V2_URL in exported["@context"]


@pytest.mark.parametrize("keypair_class", [Ed25519Multikey, P256Multikey])
def test_export_import_private(keypair_class):
    keypair = make_keypair(keypair_class)
    exported = keypair.export({"flag": "private"})
    assert exported["secretKeyMultibase"].startswith("z")

    imported = keypair_class.import_(exported, {"checkContext": True})
    assert imported.has_private_key()
    assert imported.id == keypair.id
    assert imported.generate_fingerprint() == keypair.generate_fingerprint()

    signature = imported.sign(b"hello")
    assert keypair.verify(b"hello", signature)


def test_export_private_without_private_key(ed25519_keypair):
    public_only = Ed25519Multikey.import_(ed25519_keypair.export())
    assert not public_only.has_private_key()
    with pytest.raises(ExportError):
        public_only.export({"flag": "private"})
    with pytest.raises(KeypairError):
        public_only.sign(b"hello")


def test_import_checks_context(ed25519_keypair):
    exported = ed25519_keypair.export()
    del exported["@context"]
    # Without the check, a bare document is accepted
    assert Ed25519Multikey.import_(exported).has_public_key()
    with pytest.raises(ContextMismatchError):
        Ed25519Multikey.import_(exported, {"checkContext": True})


def test_import_checks_type(ed25519_keypair):
    exported = ed25519_keypair.export()
    exported["type"] = "Ed25519VerificationKey2020"
    with pytest.raises(ContextMismatchError):
        Ed25519Multikey.import_(exported)


def test_import_rejects_other_key_types(p256_keypair):
    with pytest.raises(InitializationError):
        Ed25519Multikey.import_(p256_keypair.export())


def test_import_rejects_mismatched_keys(ed25519_keypair):
    exported = ed25519_keypair.export({"flag": "private"})
    other = make_keypair(Ed25519Multikey, seed=bytes(32))
    exported["publicKeyMultibase"] = other.generate_fingerprint()
    with pytest.raises(InitializationError):
        Ed25519Multikey.import_(exported)


def test_import_without_key_material():
    with pytest.raises(InitializationError):
        Ed25519Multikey.import_({"id": ALICE + "#key", "type": "Multikey"})


def test_revoked_keys(ed25519_keypair):
    past = datetime.now(pytz.utc) - timedelta(days=2)
    ed25519_keypair.revoked = past
    exported = ed25519_keypair.export()
    assert exported["revoked"].endswith("Z")

    imported = Ed25519Multikey.import_(exported)
    assert imported.is_revoked()
    with pytest.raises(RevokedKeyError):
        Ed25519Multikey.import_(exported, {"checkRevoked": True})

    ed25519_keypair.revoked = datetime.now(pytz.utc) + timedelta(days=2)
    exported = ed25519_keypair.export()
    assert not Ed25519Multikey.import_(
        exported, {"checkRevoked": True}).is_revoked()


def test_invalid_revocation_time(ed25519_keypair):
    exported = ed25519_keypair.export()
    exported["revoked"] = "last tuesday"
    with pytest.raises(InitializationError):
        Ed25519Multikey.import_(exported)


def test_ed25519_sign_verify(ed25519_keypair):
    signature = ed25519_keypair.sign(b"some data")
    assert len(signature) == 64
    assert ed25519_keypair.verify(b"some data", signature)
    assert not ed25519_keypair.verify(b"other data", signature)


def test_p256_sign_verify(p256_keypair):
    signature = p256_keypair.sign(b"some data")
    assert len(signature) == 64
    assert p256_keypair.verify(b"some data", signature)
    assert not p256_keypair.verify(b"other data", signature)
    assert not p256_keypair.verify(b"some data", signature[:-1])
