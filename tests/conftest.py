import pytest

from pyld_integrity import contexts
from pyld_integrity.keypair import Ed25519Multikey, P256Multikey
from pyld_integrity.loader import make_simple_loader

ALICE = "did:example:alice"

CREDENTIAL = {
    "@context": [contexts.CREDENTIALS_CONTEXT_V2_URL],
    "id": "urn:uuid:58172aac-d8ba-11ed-83dd-0b3aef56cc33",
    "type": ["VerifiableCredential"],
    "issuer": ALICE,
    "validFrom": "2026-01-01T00:00:00Z",
    "credentialSubject": {
        "id": "did:example:bob",
        "name": "Bob Example"}}


def make_keypair(keypair_class, seed=bytes(range(32)), controller=ALICE):
    keypair = keypair_class(controller=controller)
    keypair.initialize(seed)
    return keypair


def controller_document(keypairs, relationships=("assertionMethod",),
                        revoked=None):
    verification_methods = []
    for keypair in keypairs:
        method = {
            "id": keypair.id,
            "type": "Multikey",
            "controller": ALICE,
            "publicKeyMultibase": keypair.generate_fingerprint()}
        if revoked:
            method["revoked"] = revoked
        verification_methods.append(method)

    document = {
        "@context": [contexts.DID_CONTEXT_V1_URL,
                     contexts.MULTIKEY_CONTEXT_V1_URL],
        "id": ALICE,
        "verificationMethod": verification_methods}
    for relationship in relationships:
        document[relationship] = [keypair.id for keypair in keypairs]
    return document


@pytest.fixture
def ed25519_keypair():
    return make_keypair(Ed25519Multikey)


@pytest.fixture
def p256_keypair():
    return make_keypair(P256Multikey)


@pytest.fixture
def alice_loader(ed25519_keypair, p256_keypair):
    return make_simple_loader(
        {ALICE: controller_document([ed25519_keypair, p256_keypair])})
