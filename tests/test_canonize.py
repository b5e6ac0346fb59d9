import copy

import pytest

from pyld_integrity import contexts
from pyld_integrity.canonize import (
    canonicalize_document, canonicalize_proof_options,
    document_declares_context, load_controller_document, node_id,
    resolve_controller_claim, resolve_verification_method)
from pyld_integrity.errors import (
    CanonicalizationError, ControllerNotFoundError, DocumentNotFoundError,
    MethodNotFoundError)
from pyld_integrity.loader import basic_loader, make_simple_loader

from conftest import ALICE, CREDENTIAL, controller_document

PROOF = {
    "type": "DataIntegrityProof",
    "cryptosuite": "eddsa-rdfc-2022",
    "created": "2026-01-01T00:00:00Z",
    "verificationMethod": ALICE + "#key-1",
    "proofPurpose": "assertionMethod"}


def test_canonicalize_document():
    canonical = canonicalize_document(CREDENTIAL, basic_loader)
    assert isinstance(canonical, bytes)
    lines = canonical.decode("utf-8").splitlines()
    assert lines == sorted(lines)
    assert ('<did:example:bob> <https://schema.org/name> "Bob Example" .'
            in lines)


def test_canonicalize_is_order_independent():
    reordered = dict(reversed(list(CREDENTIAL.items())))
    assert canonicalize_document(reordered, basic_loader) == (
        canonicalize_document(CREDENTIAL, basic_loader))


def test_canonicalize_unknown_context():
    document = dict(CREDENTIAL, **{
        "@context": ["https://example.com/unknown-context"]})
    with pytest.raises(DocumentNotFoundError):
        canonicalize_document(document, basic_loader)


def test_canonicalize_invalid_document():
    with pytest.raises(CanonicalizationError):
        canonicalize_document(
            {"@context": {"name": {"@id": 12}}, "name": "x"}, basic_loader)


def test_skip_expansion_loads_nothing():
    expanded = {
        "@id": "did:example:bob",
        "https://schema.org/name": [{"@value": "Bob Example"}]}
    canonical = canonicalize_document(
        expanded, basic_loader, skip_expansion=True)
    assert b"Bob Example" in canonical

    context_url = "https://example.com/contexts/skip-expansion"
    context_loader = make_simple_loader({
        context_url: {"@context": {"name": "https://schema.org/name"}}})
    compacted = {"@context": context_url, "@id": "did:example:bob",
                 "name": "Bob Example"}
    with pytest.raises(DocumentNotFoundError):
        canonicalize_document(
            compacted, context_loader, skip_expansion=True)
    assert canonicalize_document(compacted, context_loader) == canonical


def test_proof_options_ignore_proof_value_and_nonce():
    canonical = canonicalize_proof_options(PROOF, basic_loader)
    signed = dict(PROOF, proofValue="z3FXQ", nonce="1234")
    assert canonicalize_proof_options(signed, basic_loader) == canonical
    assert b"https://w3id.org/security#assertionMethod" in canonical

    # The node is never modified in place
    assert not "@context" in PROOF


def test_proof_options_change_with_created():
    changed = dict(PROOF, created="2026-01-02T00:00:00Z")
    assert canonicalize_proof_options(changed, basic_loader) != (
        canonicalize_proof_options(PROOF, basic_loader))


def test_document_declares_context():
    assert document_declares_context(
        {"@context": contexts.SECURITY_CONTEXT_V2_URL},
        contexts.SECURITY_CONTEXT_V2_URL)
    assert document_declares_context(
        {"@context": list(contexts.PROOF_CONTEXT)},
        contexts.SECURITY_CONTEXT_V2_URL)
    assert not document_declares_context(
        {"@context": contexts.DID_CONTEXT_V1_URL},
        contexts.SECURITY_CONTEXT_V2_URL)
    assert not document_declares_context({}, contexts.SECURITY_CONTEXT_V2_URL)


def test_node_id():
    assert node_id(ALICE) == ALICE
    assert node_id({"id": ALICE, "name": "Alice"}) == ALICE
    assert node_id({"@id": ALICE}) == ALICE
    assert node_id(None) is None


def test_resolve_verification_method(ed25519_keypair, alice_loader):
    method = resolve_verification_method(ed25519_keypair.id, alice_loader)
    assert method["id"] == ed25519_keypair.id
    assert method["type"] == "Multikey"
    assert node_id(method["controller"]) == ALICE
    assert method["publicKeyMultibase"] == (
        ed25519_keypair.generate_fingerprint())
    assert document_declares_context(
        method, contexts.SECURITY_CONTEXT_V2_URL)


def test_resolve_missing_verification_method(alice_loader):
    with pytest.raises(MethodNotFoundError):
        resolve_verification_method(ALICE + "#no-such-key", alice_loader)
    with pytest.raises(MethodNotFoundError):
        resolve_verification_method(
            "did:example:mallory#key-1", alice_loader)


def test_resolve_controller_claim(ed25519_keypair, alice_loader):
    document = load_controller_document(ALICE, alice_loader)
    controller = resolve_controller_claim(
        document, ALICE, "assertionMethod", ed25519_keypair.id, alice_loader)
    assert controller["id"] == ALICE


def test_resolve_controller_claim_wrong_relationship(ed25519_keypair):
    key_loader = make_simple_loader({
        ALICE: controller_document(
            [ed25519_keypair], relationships=["authentication"])})
    document = load_controller_document(ALICE, key_loader)

    resolve_controller_claim(
        document, ALICE, "authentication", ed25519_keypair.id, key_loader)
    with pytest.raises(ControllerNotFoundError):
        resolve_controller_claim(
            document, ALICE, "assertionMethod", ed25519_keypair.id,
            key_loader)


def test_resolve_controller_claim_wrong_controller(ed25519_keypair,
                                                   alice_loader):
    document = load_controller_document(ALICE, alice_loader)
    with pytest.raises(ControllerNotFoundError):
        resolve_controller_claim(
            document, "did:example:mallory", "assertionMethod",
            ed25519_keypair.id, alice_loader)


def test_load_missing_controller(alice_loader):
    with pytest.raises(ControllerNotFoundError):
        load_controller_document("did:example:mallory", alice_loader)


def test_loaded_controller_is_a_copy(alice_loader):
    document = load_controller_document(ALICE, alice_loader)
    original = copy.deepcopy(document)
    document["assertionMethod"] = []
    assert load_controller_document(ALICE, alice_loader) == original


def test_resolved_ids_stay_absolute(p256_keypair, alice_loader):
    # Ids come back as given, not relative to the method's document
    method = resolve_verification_method(p256_keypair.id, alice_loader)
    assert method["id"] == p256_keypair.id
    assert method["id"].startswith(ALICE + "#zDn")
    assert node_id(method["controller"]) == ALICE


@pytest.mark.parametrize("relationship", [
    "verificationMethod", "controller", ["assertionMethod"]])
def test_resolve_controller_claim_requires_relationship(
        ed25519_keypair, relationship):
    key_loader = make_simple_loader({
        ALICE: controller_document([ed25519_keypair], relationships=())})
    document = load_controller_document(ALICE, key_loader)
    with pytest.raises(ControllerNotFoundError):
        resolve_controller_claim(
            document, ALICE, relationship, ed25519_keypair.id, key_loader)


def test_resolve_controller_claim_unloadable_context(ed25519_keypair):
    document = controller_document([ed25519_keypair])
    document["@context"] = ["https://example.com/contexts/unknown-did-v9"]
    key_loader = make_simple_loader({ALICE: document})
    with pytest.raises(ControllerNotFoundError):
        resolve_controller_claim(
            document, ALICE, "assertionMethod", ed25519_keypair.id,
            key_loader)
