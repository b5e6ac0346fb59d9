## Built-in JSON-LD context documents, served without touching the network.
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

from types import MappingProxyType

CREDENTIALS_CONTEXT_V1_URL = "https://www.w3.org/2018/credentials/v1"
CREDENTIALS_CONTEXT_V2_URL = "https://www.w3.org/ns/credentials/v2"
SECURITY_CONTEXT_V1_URL = "https://w3id.org/security/v1"
SECURITY_CONTEXT_V2_URL = "https://w3id.org/security/v2"
DATA_INTEGRITY_CONTEXT_V2_URL = "https://w3id.org/security/data-integrity/v2"
MULTIKEY_CONTEXT_V1_URL = "https://w3id.org/security/multikey/v1"
DID_CONTEXT_V1_URL = "https://www.w3.org/ns/did/v1"

# Proof options and framed verification methods are always interpreted
# with this context, whatever the secured document declares.
PROOF_CONTEXT = (SECURITY_CONTEXT_V2_URL, DATA_INTEGRITY_CONTEXT_V2_URL)

SECURITY_PROOF_URL = "https://w3id.org/security#proof"

_SEC = "https://w3id.org/security#"
_CRED = "https://www.w3.org/2018/credentials#"
_XSD_DATETIME = "http://www.w3.org/2001/XMLSchema#dateTime"


def _merge(*term_maps):
    merged = {}
    for term_map in term_maps:
        merged.update(term_map)
    return merged


def _relationship(iri):
    return {"@id": _SEC + iri, "@type": "@id", "@container": "@set"}


_RELATIONSHIPS = {
    "assertionMethod": _relationship("assertionMethod"),
    "authentication": _relationship("authenticationMethod"),
    "capabilityDelegation": _relationship("capabilityDelegationMethod"),
    "capabilityInvocation": _relationship("capabilityInvocationMethod"),
    "keyAgreement": _relationship("keyAgreementMethod"),
}

# The proof purposes a controller document can authorize a method for.
VERIFICATION_RELATIONSHIPS = frozenset(_RELATIONSHIPS)

_MULTIKEY_TERMS = {
    "Multikey": _SEC + "Multikey",
    "controller": {"@id": _SEC + "controller", "@type": "@id"},
    "revoked": {"@id": _SEC + "revoked", "@type": _XSD_DATETIME},
    "expires": {"@id": _SEC + "expiration", "@type": _XSD_DATETIME},
    "publicKeyMultibase": {
        "@id": _SEC + "publicKeyMultibase", "@type": _SEC + "multibase"},
    "secretKeyMultibase": {
        "@id": _SEC + "secretKeyMultibase", "@type": _SEC + "multibase"},
}

_PROOF_TERMS = {
    "proof": {"@id": _SEC + "proof", "@type": "@id", "@container": "@graph"},
    "DataIntegrityProof": _SEC + "DataIntegrityProof",
    "challenge": _SEC + "challenge",
    "created": {"@id": "http://purl.org/dc/terms/created",
                "@type": _XSD_DATETIME},
    "cryptosuite": {"@id": _SEC + "cryptosuite",
                    "@type": _SEC + "cryptosuiteString"},
    "domain": _SEC + "domain",
    "expires": {"@id": _SEC + "expiration", "@type": _XSD_DATETIME},
    "nonce": _SEC + "nonce",
    "previousProof": {"@id": _SEC + "previousProof", "@type": "@id"},
    "proofPurpose": {"@id": _SEC + "proofPurpose", "@type": "@vocab"},
    "proofValue": {"@id": _SEC + "proofValue", "@type": _SEC + "multibase"},
    "verificationMethod": {"@id": _SEC + "verificationMethod", "@type": "@id"},
}


SECURITY_CONTEXT_V1 = {
    "@context": {
        "id": "@id",
        "type": "@type",

        "dc": "http://purl.org/dc/terms/",
        "sec": "https://w3id.org/security#",
        "xsd": "http://www.w3.org/2001/XMLSchema#",

        "EcdsaKoblitzSignature2016": "sec:EcdsaKoblitzSignature2016",
        "Ed25519Signature2018": "sec:Ed25519Signature2018",
        "EncryptedMessage": "sec:EncryptedMessage",
        "GraphSignature2012": "sec:GraphSignature2012",
        "LinkedDataSignature2015": "sec:LinkedDataSignature2015",
        "LinkedDataSignature2016": "sec:LinkedDataSignature2016",
        "CryptographicKey": "sec:Key",

        "authenticationTag": "sec:authenticationTag",
        "canonicalizationAlgorithm": "sec:canonicalizationAlgorithm",
        "cipherAlgorithm": "sec:cipherAlgorithm",
        "cipherData": "sec:cipherData",
        "cipherKey": "sec:cipherKey",
        "created": {"@id": "dc:created", "@type": "xsd:dateTime"},
        "creator": {"@id": "dc:creator", "@type": "@id"},
        "digestAlgorithm": "sec:digestAlgorithm",
        "digestValue": "sec:digestValue",
        "domain": "sec:domain",
        "encryptionKey": "sec:encryptionKey",
        "expiration": {"@id": "sec:expiration", "@type": "xsd:dateTime"},
        "expires": {"@id": "sec:expiration", "@type": "xsd:dateTime"},
        "initializationVector": "sec:initializationVector",
        "iterationCount": "sec:iterationCount",
        "nonce": "sec:nonce",
        "normalizationAlgorithm": "sec:normalizationAlgorithm",
        "owner": {"@id": "sec:owner", "@type": "@id"},
        "password": "sec:password",
        "privateKey": {"@id": "sec:privateKey", "@type": "@id"},
        "privateKeyPem": "sec:privateKeyPem",
        "publicKey": {"@id": "sec:publicKey", "@type": "@id"},
        "publicKeyBase58": "sec:publicKeyBase58",
        "publicKeyPem": "sec:publicKeyPem",
        "publicKeyWif": "sec:publicKeyWif",
        "publicKeyService": {"@id": "sec:publicKeyService", "@type": "@id"},
        "revoked": {"@id": "sec:revoked", "@type": "xsd:dateTime"},
        "salt": "sec:salt",
        "signature": "sec:signature",
        "signatureAlgorithm": "sec:signingAlgorithm",
        "signatureValue": "sec:signatureValue"}}

SECURITY_CONTEXT_V2 = {
    "@context": [
        {"@version": 1.1},
        SECURITY_CONTEXT_V1_URL,
        _merge(_RELATIONSHIPS, {
            "AesKeyWrappingKey2019": "sec:AesKeyWrappingKey2019",
            "EcdsaSecp256k1Signature2019": "sec:EcdsaSecp256k1Signature2019",
            "EcdsaSecp256k1VerificationKey2019": (
                "sec:EcdsaSecp256k1VerificationKey2019"),
            "EcdsaSecp256r1Signature2019": "sec:EcdsaSecp256r1Signature2019",
            "Ed25519VerificationKey2018": "sec:Ed25519VerificationKey2018",
            "RsaSignature2018": "sec:RsaSignature2018",
            "RsaVerificationKey2018": "sec:RsaVerificationKey2018",
            "X25519KeyAgreementKey2019": "sec:X25519KeyAgreementKey2019",

            "challenge": "sec:challenge",
            "controller": {"@id": "sec:controller", "@type": "@id"},
            "jws": "sec:jws",
            "proof": {"@id": "sec:proof", "@type": "@id",
                      "@container": "@graph"},
            "proofPurpose": {"@id": "sec:proofPurpose", "@type": "@vocab"},
            "proofValue": "sec:proofValue",
            "verificationMethod": {"@id": "sec:verificationMethod",
                                   "@type": "@id"},
        }),
    ]}

DATA_INTEGRITY_CONTEXT_V2 = {
    "@context": _merge(_RELATIONSHIPS, _MULTIKEY_TERMS, _PROOF_TERMS, {
        "@version": 1.1,
        "id": "@id",
        "type": "@type",
    })}

MULTIKEY_CONTEXT_V1 = {
    "@context": _merge(_MULTIKEY_TERMS, {
        "@version": 1.1,
        "id": "@id",
        "type": "@type",
    })}

DID_CONTEXT_V1 = {
    "@context": _merge(_RELATIONSHIPS, {
        "@version": 1.1,
        "id": "@id",
        "type": "@type",
        "alsoKnownAs": {
            "@id": "https://www.w3.org/ns/activitystreams#alsoKnownAs",
            "@type": "@id"},
        "controller": {"@id": _SEC + "controller", "@type": "@id"},
        "service": {"@id": "https://www.w3.org/ns/did#service",
                    "@type": "@id"},
        "serviceEndpoint": {
            "@id": "https://www.w3.org/ns/did#serviceEndpoint",
            "@type": "@id"},
        "verificationMethod": {"@id": _SEC + "verificationMethod",
                               "@type": "@id"},
    })}

CREDENTIALS_CONTEXT_V1 = {
    "@context": {
        "@version": 1.1,
        "id": "@id",
        "type": "@type",

        "cred": _CRED,
        "sec": _SEC,
        "xsd": "http://www.w3.org/2001/XMLSchema#",

        "VerifiableCredential": "cred:VerifiableCredential",
        "VerifiablePresentation": "cred:VerifiablePresentation",

        "credentialSchema": {"@id": "cred:credentialSchema", "@type": "@id"},
        "credentialStatus": {"@id": "cred:credentialStatus", "@type": "@id"},
        "credentialSubject": {"@id": "cred:credentialSubject",
                              "@type": "@id"},
        "evidence": {"@id": "cred:evidence", "@type": "@id"},
        "expirationDate": {"@id": "cred:expirationDate",
                           "@type": "xsd:dateTime"},
        "holder": {"@id": "cred:holder", "@type": "@id"},
        "issuanceDate": {"@id": "cred:issuanceDate", "@type": "xsd:dateTime"},
        "issuer": {"@id": "cred:issuer", "@type": "@id"},
        "refreshService": {"@id": "cred:refreshService", "@type": "@id"},
        "termsOfUse": {"@id": "cred:termsOfUse", "@type": "@id"},
        "verifiableCredential": {"@id": "cred:verifiableCredential",
                                 "@type": "@id", "@container": "@graph"},
        "proof": {"@id": "sec:proof", "@type": "@id", "@container": "@graph"},
    }}

CREDENTIALS_CONTEXT_V2 = {
    "@context": {
        "@version": 1.1,
        "@vocab": "https://www.w3.org/ns/credentials/issuer-dependent#",
        "id": "@id",
        "type": "@type",

        "description": "https://schema.org/description",
        "name": "https://schema.org/name",

        "VerifiableCredential": _CRED + "VerifiableCredential",
        "VerifiablePresentation": _CRED + "VerifiablePresentation",
        "DataIntegrityProof": _SEC + "DataIntegrityProof",

        "credentialSchema": {"@id": _CRED + "credentialSchema",
                             "@type": "@id"},
        "credentialStatus": {"@id": _CRED + "credentialStatus",
                             "@type": "@id"},
        "credentialSubject": {"@id": _CRED + "credentialSubject",
                              "@type": "@id"},
        "evidence": {"@id": _CRED + "evidence", "@type": "@id"},
        "holder": {"@id": _CRED + "holder", "@type": "@id"},
        "issuer": {"@id": _CRED + "issuer", "@type": "@id"},
        "refreshService": {"@id": _CRED + "refreshService", "@type": "@id"},
        "termsOfUse": {"@id": _CRED + "termsOfUse", "@type": "@id"},
        "validFrom": {"@id": _CRED + "validFrom", "@type": _XSD_DATETIME},
        "validUntil": {"@id": _CRED + "validUntil", "@type": _XSD_DATETIME},
        "verifiableCredential": {"@id": _CRED + "verifiableCredential",
                                 "@type": "@id", "@container": "@graph"},
        "proof": {"@id": _SEC + "proof", "@type": "@id",
                  "@container": "@graph"},
    }}


# Process-wide and read-only.  Loaders hand out deep copies.
BUILTIN_CONTEXTS = MappingProxyType({
    SECURITY_CONTEXT_V1_URL: SECURITY_CONTEXT_V1,
    SECURITY_CONTEXT_V2_URL: SECURITY_CONTEXT_V2,
    DATA_INTEGRITY_CONTEXT_V2_URL: DATA_INTEGRITY_CONTEXT_V2,
    MULTIKEY_CONTEXT_V1_URL: MULTIKEY_CONTEXT_V1,
    DID_CONTEXT_V1_URL: DID_CONTEXT_V1,
    CREDENTIALS_CONTEXT_V1_URL: CREDENTIALS_CONTEXT_V1,
    CREDENTIALS_CONTEXT_V2_URL: CREDENTIALS_CONTEXT_V2,
})
