## Creating and verifying Data Integrity proofs over JSON-LD documents.
##
## BSD 3-Clause License
## Copyright (c) 2017 Spec-Ops.
##
## Redistribution and use in source and binary forms, with or without
## modification, are permitted provided that the following conditions are met:
##
## Redistributions of source code must retain the above copyright notice,
## this list of conditions and the following disclaimer.
##
## Redistributions in binary form must reproduce the above copyright
## notice, this list of conditions and the following disclaimer in the
## documentation and/or other materials provided with the distribution.
##
## Neither the name of the Spec-Ops nor the names of its contributors
## may be used to endorse or promote products derived from this
## software without specific prior written permission.
##
## THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS
## IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED
## TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A
## PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
## HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
## SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED
## TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR
## PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
## LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
## NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
## SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

import copy
import json
import logging
from datetime import datetime

from cryptography.hazmat.primitives import hashes
from multiformats import multibase
from pyld import jsonld

from . import contexts
from .canonize import (
    canonicalize_document, canonicalize_proof_options,
    load_controller_document, node_id, resolve_controller_claim,
    resolve_verification_method)
from .errors import (
    CanonicalizationError, DataIntegrityError, DataIntegrityTypeError,
    KeypairError, MissingProofError, MissingPurposeError,
    ProofExpiredError, ProofVerificationError, ResolutionError,
    SuiteNotImplementedError, UnsupportedSuiteError)
from .loader import get_loader
from .settings import settings
from .utils import is_valid_uri, parse_w3c_date, utcnow, w3c_date

logger = logging.getLogger(__name__)

_get_values = jsonld.JsonLdProcessor.get_values

DATA_INTEGRITY_PROOF = "DataIntegrityProof"
PROOF_KEYS = ("proof", contexts.SECURITY_PROOF_URL)

SUITES = {}


def register_suite(suite):
    """
    Add SUITE to the registry under its cryptosuite identifier.

    A suite has to name its cryptosuite and keypair class and provide both
    the sign_data and verify_data primitives, or it is refused.
    """
    missing = [attr for attr in ("cryptosuite", "keypair_class",
                                 "sign_data", "verify_data")
               if getattr(suite, attr, None) is None]
    if missing:
        raise SuiteNotImplementedError(
            "Suite %s does not provide: %s" % (
                suite.__name__, ", ".join(missing)))
    SUITES[suite.cryptosuite] = suite
    return suite


def get_suite(cryptosuite):
    if not cryptosuite in SUITES:
        raise UnsupportedSuiteError(
            ("Unsupported cryptosuite '%s'; cryptosuite must be one of: %s")
            % (cryptosuite, sorted(SUITES.keys())))
    return SUITES[cryptosuite]


def _extract_proofs(secured_document):
    """
    Split SECURED_DOCUMENT into (document without proofs, [proofs]).

    The proof set may sit under "proof" or under the full security#proof
    IRI, but the proof nodes themselves must use the compact terms
    ("type", "proofPurpose", ...).  An expanded proof node is read as
    having no type and fails as an unsupported suite.
    """
    document = copy.deepcopy(secured_document)
    proofs = []
    for key in PROOF_KEYS:
        if key in document:
            proofs.extend(_get_values(document, key))
            del document[key]
    return document, proofs


def proof_common_munge(proof):
    """
    Validate and normalize proof options before a proof is created.
    Returns a new dict.
    """
    proof = copy.deepcopy(proof)

    if not proof.get("proofPurpose"):
        raise MissingPurposeError(
            "proof.proofPurpose is required to create a proof.")

    if not isinstance(proof["proofPurpose"], str):
        raise DataIntegrityTypeError("proof.proofPurpose must be a string.")

    if "proofValue" in proof:
        raise DataIntegrityTypeError(
            "proof.proofValue must not be set on the proof options.")

    proof.setdefault("type", DATA_INTEGRITY_PROOF)
    if proof["type"] != DATA_INTEGRITY_PROOF:
        raise DataIntegrityTypeError(
            "proof.type must be %s." % DATA_INTEGRITY_PROOF)

    if ("verificationMethod" in proof
            and not is_valid_uri(proof["verificationMethod"])):
        raise DataIntegrityTypeError(
            "proof.verificationMethod must be a URL string.")

    domains = _get_values(proof, "domain")
    if not all(isinstance(domain, str) for domain in domains):
        raise DataIntegrityTypeError(
            "proof.domain must be a string or a list of strings.")

    for key in ("challenge", "nonce"):
        if key in proof and not isinstance(proof[key], str):
            raise DataIntegrityTypeError("proof.%s must be a string." % key)

    if domains and not "challenge" in proof:
        logger.warning(
            "Creating a proof for domain %s without a challenge", domains)

    for key in ("created", "expires"):
        if isinstance(proof.get(key), datetime):
            proof[key] = w3c_date(proof[key])

    proof.setdefault("created", w3c_date(utcnow()))
    return proof


def _result(errors, warnings, document=None):
    result = {
        "verified": not errors,
        "errors": errors,
        "warnings": warnings}
    if not errors and document is not None:
        result["verifiedDocument"] = document
    return result


class Cryptosuite(object):
    """
    Base for Data Integrity cryptosuites.

    The proof pipeline (canonicalization, signing input, method resolution)
    is shared.  A concrete suite names its `cryptosuite` identifier and
    keypair class and supplies the sign_data / verify_data classmethods;
    register_suite() refuses it otherwise.
    """
    type = DATA_INTEGRITY_PROOF
    cryptosuite = None
    keypair_class = None
    digest_algorithm = hashes.SHA256

    sign_data = None
    verify_data = None

    @classmethod
    def message_digest(cls, data):
        digest = hashes.Hash(cls.digest_algorithm())
        digest.update(data)
        return digest.finalize()

    @classmethod
    def transform(cls, document, loader):
        canonical = canonicalize_document(document, loader)
        if len(canonical) == 0:
            raise CanonicalizationError(
                ('The data to sign is empty. This error may be because a '
                 '"@context" was not supplied in the input thereby causing '
                 'any terms or prefixes to be undefined. '
                 'Input: %s') % (json.dumps(document)))
        return canonical

    @classmethod
    def proof_configuration(cls, proof, loader):
        return canonicalize_proof_options(proof, loader)

    @classmethod
    def create_verify_hash(cls, canonical_document, canonical_options):
        """
        The signing input: the digest of the canonical proof options
        followed by the digest of the canonical document.
        """
        return (cls.message_digest(canonical_options)
                + cls.message_digest(canonical_document))

    @classmethod
    def format_for_signature(cls, document, proof, loader):
        return cls.create_verify_hash(
            cls.transform(document, loader),
            cls.proof_configuration(proof, loader))

    @classmethod
    def create_proof(cls, input_document, options):
        """
        Create a proof over INPUT_DOCUMENT.

         - input_document: the JSON-LD document to be secured.  Proofs it
           already carries are not covered by the new proof.
         - options:
            proof: the proof options (proofPurpose is required).
            keypair: the keypair to sign with.
            [documentLoader] the document loader.

        Returns the proof, with proofValue set.
        """
        proof = proof_common_munge(options["proof"])
        proof.setdefault("cryptosuite", cls.cryptosuite)
        if proof["cryptosuite"] != cls.cryptosuite:
            raise DataIntegrityTypeError(
                "proof.cryptosuite must be %s for this suite." % (
                    cls.cryptosuite,))

        keypair = options.get("keypair")
        if not isinstance(keypair, cls.keypair_class):
            raise DataIntegrityTypeError(
                "options.keypair must be a %s." % cls.keypair_class.__name__)
        if not "verificationMethod" in proof:
            if not keypair.id:
                raise DataIntegrityTypeError(
                    "proof.verificationMethod is required when the keypair "
                    "has no id.")
            proof["verificationMethod"] = keypair.id

        loader = get_loader(options)
        document, existing_proofs = _extract_proofs(input_document)

        existing_ids = set(proof_id for proof_id in (
            existing.get("id") for existing in existing_proofs) if proof_id)
        for previous in _get_values(proof, "previousProof"):
            if not previous in existing_ids:
                raise DataIntegrityError(
                    "proof.previousProof %s is not a proof on the document."
                    % previous)

        hash_data = cls.format_for_signature(document, proof, loader)
        proof["proofValue"] = multibase.encode(
            cls.sign_data(hash_data, keypair), "base58btc")

        logger.debug("Created %s proof with %s for %s",
                     cls.cryptosuite, proof["verificationMethod"],
                     proof["proofPurpose"])
        return proof

    @classmethod
    def check_proof_options(cls, proof, options):
        """
        Checks on the proof node that need no cryptography: expiry and
        the expected domain and challenge.  Returns (errors, warnings).
        """
        errors = []
        warnings = []

        if "expires" in proof:
            try:
                expires = parse_w3c_date(proof["expires"])
            except ValueError as e:
                errors.append(ProofVerificationError(
                    "proof.expires is not a valid dateTime: %s" % e))
            else:
                now = utcnow()
                if expires <= now:
                    errors.append(ProofExpiredError(
                        "The proof expired at %s." % proof["expires"]))
                elif expires - now <= settings.Proof.expiry_warning_window:
                    warnings.append(ProofExpiredError(
                        "The proof expires soon, at %s." % proof["expires"]))

        if options.get("domain") is not None:
            expected = _get_values(options, "domain")
            actual = _get_values(proof, "domain")
            if not set(expected) <= set(actual):
                errors.append(ProofVerificationError(
                    "The proof domain %s does not match %s." % (
                        actual, expected)))

        if options.get("challenge") is not None:
            if proof.get("challenge") != options["challenge"]:
                errors.append(ProofVerificationError(
                    "The proof challenge does not match."))

        return errors, warnings

    @classmethod
    def get_verification_key(cls, proof, loader):
        """
        Resolve the proof's verification method into a keypair, checking
        that its controller authorizes it for the proof purpose.
        """
        method_id = proof.get("verificationMethod")
        if not is_valid_uri(method_id):
            raise ResolutionError(
                "proof.verificationMethod is missing or not a URL.")

        method = resolve_verification_method(method_id, loader)
        controller_id = node_id(method.get("controller"))
        if not controller_id:
            raise ResolutionError(
                "Verification method %s names no controller." % method_id)

        controller = load_controller_document(controller_id, loader)
        resolve_controller_claim(
            controller, controller_id, proof["proofPurpose"], method_id,
            loader)

        return cls.keypair_class.import_(
            method, {"checkContext": True, "checkRevoked": True})

    @classmethod
    def verify_proof(cls, document, proof, options):
        """
        Verify a single PROOF over DOCUMENT (which carries no proofs).

        Returns a verification result; failures of trust are reported in
        its "errors", never raised.
        """
        loader = get_loader(options)
        proof = copy.deepcopy(proof)

        if not proof.get("proofPurpose"):
            raise MissingPurposeError("proof.proofPurpose is missing.")
        if not isinstance(proof["proofPurpose"], str):
            raise DataIntegrityTypeError(
                "proof.proofPurpose must be a string.")
        if not isinstance(proof.get("proofValue"), str):
            raise DataIntegrityTypeError(
                "The proof to verify carries no proofValue.")

        errors, warnings = cls.check_proof_options(proof, options)
        if errors:
            return _result(errors, warnings)

        try:
            signature = multibase.decode(proof["proofValue"])
        except (KeyError, ValueError) as e:
            return _result([ProofVerificationError(
                "proof.proofValue is not valid multibase: %s" % e)], warnings)

        hash_data = cls.format_for_signature(document, proof, loader)

        try:
            keypair = cls.get_verification_key(proof, loader)
        except (ResolutionError, KeypairError) as e:
            logger.info("Verification method of %s proof rejected: %s",
                        cls.cryptosuite, e)
            return _result([e], warnings)

        if not cls.verify_data(hash_data, signature, keypair):
            return _result([ProofVerificationError(
                "The signature does not match the document.")], warnings)

        logger.debug("Verified %s proof by %s", cls.cryptosuite,
                     proof["verificationMethod"])
        return _result([], warnings, document)


def create_proof(input_document, options):
    """
    Create a Data Integrity proof for INPUT_DOCUMENT.

     - input_document: the JSON-LD document to be secured.
     - options:
        proof: the proof options; proofPurpose is required, cryptosuite
          defaults to the configured default suite.
        keypair: the keypair to sign with.
        [documentLoader] the document loader.
    """
    if not "proof" in options:
        raise DataIntegrityTypeError("options.proof is required.")
    if not options["proof"].get("proofPurpose"):
        raise MissingPurposeError(
            "proof.proofPurpose is required to create a proof.")
    suite = get_suite(options["proof"].get(
        "cryptosuite", settings.Proof.default_cryptosuite))
    return suite.create_proof(input_document, options)


def verify_proof(secured_document, options=None):
    """
    Verify every proof on SECURED_DOCUMENT.

     - secured_document: the JSON-LD document with one or more proofs.
     - options:
        [documentLoader] the document loader.
        [domain] a domain (or list of domains) the proofs must carry.
        [challenge] the challenge the proofs must carry.

    Returns a dict with "verified", "errors" and "warnings", plus
    "verifiedDocument" (the document without its proofs) when verified.
    Each previousProof must name a proof in the same set which verifies.
    """
    options = options or {}
    document, proofs = _extract_proofs(secured_document)
    if not proofs:
        raise MissingProofError("No proof found on the document.")

    errors = []
    warnings = []
    outcomes = {}
    for proof in proofs:
        if proof.get("type") != DATA_INTEGRITY_PROOF:
            raise UnsupportedSuiteError(
                "Unsupported proof type %r." % (proof.get("type"),))
        suite = get_suite(proof.get("cryptosuite"))
        result = suite.verify_proof(document, proof, options)
        errors.extend(result["errors"])
        warnings.extend(result["warnings"])
        if proof.get("id"):
            outcomes[proof["id"]] = result["verified"]

    for proof in proofs:
        for previous in _get_values(proof, "previousProof"):
            if not previous in outcomes:
                errors.append(ProofVerificationError(
                    "previousProof %s was not found on the document."
                    % previous))
            elif not outcomes[previous]:
                errors.append(ProofVerificationError(
                    "previousProof %s did not verify." % previous))

    if errors:
        logger.info("Proof verification failed: %s", errors)
    return _result(errors, warnings, document)


def sign(document, options):
    """
    Return a copy of DOCUMENT with a new proof added to its proof set.
    Takes the same options as create_proof().
    """
    proof = create_proof(document, options)
    output = copy.deepcopy(document)
    existing = _get_values(output, "proof")
    output["proof"] = existing + [proof] if existing else proof
    return output


def verify(signed_document, options=None):
    return verify_proof(signed_document, options)
