## Keypairs: key material, fingerprints, and serialized key documents.
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

import abc
import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature, encode_dss_signature)
from multiformats import multibase

from . import contexts
from .canonize import document_declares_context, node_id
from .errors import (
    ContextMismatchError, ExportError, InitializationError, KeypairError,
    RevokedKeyError)
from .utils import parse_w3c_date, utcnow, w3c_date

logger = logging.getLogger(__name__)


class Keypair(metaclass=abc.ABCMeta):
    """
    A cryptographic keypair, used to sign and verify messages.

    The TYPE of a keypair is fixed by its class and read-only on the
    instance.  ID defaults to the controller plus the key fingerprint.
    REVOKED, when set, is the time the key stopped being valid.
    """
    key_type = None

    def __init__(self, id=None, controller=None, revoked=None):
        self._type = self.key_type
        self._id = id
        self.controller = controller
        self.revoked = revoked

    @property
    def type(self):
        return self._type

    @property
    def id(self):
        if self._id:
            return self._id
        if self.controller and self.has_public_key():
            return "%s#%s" % (self.controller, self.generate_fingerprint())
        return None

    @id.setter
    def id(self, value):
        self._id = value

    @property
    def revoked(self):
        return self._revoked

    @revoked.setter
    def revoked(self, value):
        self._revoked = parse_w3c_date(value) if value is not None else None

    def is_revoked(self, at=None):
        return self.revoked is not None and self.revoked <= (at or utcnow())

    @abc.abstractmethod
    def initialize(self, seed=None):
        """
        Derive the key material from SEED, or from a secure random source
        if no seed is given.
        """

    @abc.abstractmethod
    def has_public_key(self):
        pass

    @abc.abstractmethod
    def has_private_key(self):
        pass

    @abc.abstractmethod
    def generate_fingerprint(self):
        """
        Multibase + multicodec encoded fingerprint of the public key.
        """

    @abc.abstractmethod
    def verify_fingerprint(self, fingerprint):
        """
        Whether FINGERPRINT belongs to this keypair's public key.  Never
        raises on a mismatch.
        """

    @abc.abstractmethod
    def export(self, options=None):
        pass

    @classmethod
    @abc.abstractmethod
    def import_(cls, document, options=None):
        pass

    @abc.abstractmethod
    def sign(self, data):
        pass

    @abc.abstractmethod
    def verify(self, data, signature):
        pass


class MultikeyKeypair(Keypair):
    """
    Keypairs serialized as Multikey verification methods: the public and
    secret keys are multicodec-prefixed and base58btc multibase encoded.

    Subclasses supply the multicodec headers and the conversions between
    raw bytes and `cryptography` key objects.
    """
    key_type = "Multikey"
    context_url = contexts.SECURITY_CONTEXT_V2_URL
    public_codec = None
    private_codec = None
    seed_length = 32

    def __init__(self, id=None, controller=None, revoked=None,
                 private_key=None, public_key=None):
        super().__init__(id=id, controller=controller, revoked=revoked)
        self.private_key = private_key
        if public_key is None and private_key is not None:
            public_key = private_key.public_key()
        self.public_key = public_key

    def has_public_key(self):
        return self.public_key is not None

    def has_private_key(self):
        return self.private_key is not None

    def initialize(self, seed=None):
        if seed is None:
            self.private_key = self._generate_private_key()
        else:
            if len(seed) != self.seed_length:
                raise InitializationError(
                    "%s seeds must be %d bytes long, got %d." % (
                        type(self).__name__, self.seed_length, len(seed)))
            self.private_key = self._load_private_bytes(bytes(seed))
        self.public_key = self.private_key.public_key()

    def _require_public_key(self):
        if self.public_key is None:
            raise KeypairError(
                "%s holds no public key material." % type(self).__name__)

    def generate_fingerprint(self):
        self._require_public_key()
        return multibase.encode(
            self.public_codec + self._public_bytes(), "base58btc")

    def verify_fingerprint(self, fingerprint):
        if not isinstance(fingerprint, str) or self.public_key is None:
            return False
        try:
            decoded = multibase.decode(fingerprint)
        except (KeyError, ValueError):
            return False
        return decoded == self.public_codec + self._public_bytes()

    def export(self, options=None):
        """
        Serialize this keypair as a Multikey document.

         - options:
            [flag] "public" (the default) or "private"; the latter adds
              secretKeyMultibase and requires private key material.
        """
        options = options or {}
        flag = options.get("flag", "public")
        self._require_public_key()

        document = {
            "@context": list(contexts.PROOF_CONTEXT),
            "id": self.id,
            "type": self.type,
            "controller": self.controller,
            "publicKeyMultibase": self.generate_fingerprint()}
        if self.revoked is not None:
            document["revoked"] = w3c_date(self.revoked)
        if flag == "private":
            if self.private_key is None:
                raise ExportError(
                    "Cannot export a private key that this keypair does "
                    "not hold.")
            document["secretKeyMultibase"] = multibase.encode(
                self.private_codec + self._private_bytes(), "base58btc")
        return {key: value for key, value in document.items()
                if value is not None}

    @classmethod
    def import_(cls, document, options=None):
        """
        Rebuild a keypair from a Multikey document.

         - options:
            [checkContext] require the document to declare the security
              context.
            [checkRevoked] refuse keys whose revocation time has passed.
            [type] the expected key type.
        """
        options = options or {}

        if (options.get("checkContext")
                and not document_declares_context(document, cls.context_url)):
            raise ContextMismatchError(
                "Key document does not declare the context %s." % (
                    cls.context_url,))

        document_type = document.get("type")
        if isinstance(document_type, list) and document_type:
            document_type = document_type[0]
        expected_type = options.get("type", cls.key_type)
        if document_type != expected_type:
            raise ContextMismatchError(
                "Key document has type %r, expected %r." % (
                    document_type, expected_type))

        revoked = document.get("revoked")
        try:
            keypair = cls(
                id=node_id(document.get("id")),
                controller=node_id(document.get("controller")),
                revoked=revoked)
        except ValueError as e:
            raise InitializationError(
                "Invalid revocation time %r: %s" % (revoked, e)) from e
        if options.get("checkRevoked") and keypair.is_revoked():
            raise RevokedKeyError(
                "Key %s was revoked at %s." % (keypair.id, revoked))

        secret = document.get("secretKeyMultibase")
        if secret:
            keypair.private_key = cls._load_private_bytes(
                cls._decode_multikey(secret, cls.private_codec))
            keypair.public_key = keypair.private_key.public_key()

        public = document.get("publicKeyMultibase")
        if public:
            public_key = cls._load_public_bytes(
                cls._decode_multikey(public, cls.public_codec))
            if keypair.public_key is not None and (
                    keypair._public_bytes() != cls._raw_public_bytes(
                        public_key)):
                raise InitializationError(
                    "publicKeyMultibase does not match secretKeyMultibase.")
            keypair.public_key = public_key

        if keypair.public_key is None:
            raise InitializationError(
                "Key document %s carries no key material." % keypair.id)
        logger.debug("Imported %s key %s (private: %s)",
                     cls.__name__, keypair.id, keypair.has_private_key())
        return keypair

    @classmethod
    def _decode_multikey(cls, value, codec):
        try:
            decoded = multibase.decode(value)
        except (KeyError, ValueError) as e:
            raise InitializationError(
                "Invalid multibase key %r: %s" % (value, e)) from e
        if not decoded.startswith(codec):
            raise InitializationError(
                "Key %r is not a %s key." % (value, cls.__name__))
        return decoded[len(codec):]

    def _public_bytes(self):
        return self._raw_public_bytes(self.public_key)

    # Subclass hooks

    @classmethod
    def _generate_private_key(cls):
        raise NotImplementedError()

    @classmethod
    def _load_private_bytes(cls, raw):
        raise NotImplementedError()

    @classmethod
    def _load_public_bytes(cls, raw):
        raise NotImplementedError()

    @classmethod
    def _raw_public_bytes(cls, public_key):
        raise NotImplementedError()

    def _private_bytes(self):
        raise NotImplementedError()


class Ed25519Multikey(MultikeyKeypair):
    # varint encoded multicodec tags: ed25519-pub (0xed), ed25519-priv (0x1300)
    public_codec = b"\xed\x01"
    private_codec = b"\x80\x26"

    @classmethod
    def _generate_private_key(cls):
        return ed25519.Ed25519PrivateKey.generate()

    @classmethod
    def _load_private_bytes(cls, raw):
        try:
            return ed25519.Ed25519PrivateKey.from_private_bytes(raw)
        except ValueError as e:
            raise InitializationError(
                "Invalid Ed25519 private key: %s" % e) from e

    @classmethod
    def _load_public_bytes(cls, raw):
        try:
            return ed25519.Ed25519PublicKey.from_public_bytes(raw)
        except ValueError as e:
            raise InitializationError(
                "Invalid Ed25519 public key: %s" % e) from e

    @classmethod
    def _raw_public_bytes(cls, public_key):
        return public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw)

    def _private_bytes(self):
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption())

    def sign(self, data):
        if self.private_key is None:
            raise KeypairError("Cannot sign without a private key.")
        return self.private_key.sign(data)

    def verify(self, data, signature):
        self._require_public_key()
        try:
            self.public_key.verify(signature, data)
            return True
        except InvalidSignature:
            return False


class P256Multikey(MultikeyKeypair):
    # varint encoded multicodec tags: p256-pub (0x1200), p256-priv (0x1306)
    public_codec = b"\x80\x24"
    private_codec = b"\x86\x26"
    curve = ec.SECP256R1
    signature_hash = hashes.SHA256
    coordinate_length = 32

    @classmethod
    def _generate_private_key(cls):
        return ec.generate_private_key(cls.curve())

    @classmethod
    def _load_private_bytes(cls, raw):
        try:
            return ec.derive_private_key(
                int.from_bytes(raw, "big"), cls.curve())
        except ValueError as e:
            raise InitializationError(
                "Invalid P-256 private key: %s" % e) from e

    @classmethod
    def _load_public_bytes(cls, raw):
        try:
            return ec.EllipticCurvePublicKey.from_encoded_point(
                cls.curve(), raw)
        except ValueError as e:
            raise InitializationError(
                "Invalid P-256 public key: %s" % e) from e

    @classmethod
    def _raw_public_bytes(cls, public_key):
        return public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.CompressedPoint)

    def _private_bytes(self):
        return self.private_key.private_numbers().private_value.to_bytes(
            self.coordinate_length, "big")

    def sign(self, data):
        """
        Sign DATA with ECDSA over SHA-256, returning the fixed length
        r || s encoding rather than DER.
        """
        if self.private_key is None:
            raise KeypairError("Cannot sign without a private key.")
        der = self.private_key.sign(data, ec.ECDSA(self.signature_hash()))
        r, s = decode_dss_signature(der)
        return (r.to_bytes(self.coordinate_length, "big")
                + s.to_bytes(self.coordinate_length, "big"))

    def verify(self, data, signature):
        self._require_public_key()
        if len(signature) != 2 * self.coordinate_length:
            return False
        r = int.from_bytes(signature[:self.coordinate_length], "big")
        s = int.from_bytes(signature[self.coordinate_length:], "big")
        try:
            self.public_key.verify(
                encode_dss_signature(r, s), data,
                ec.ECDSA(self.signature_hash()))
            return True
        except InvalidSignature:
            return False
