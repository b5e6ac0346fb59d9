## The RDF Dataset Canonicalization cryptosuites.
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

from .cryptosuite import Cryptosuite, register_suite
from .keypair import Ed25519Multikey, P256Multikey


class EddsaRdfc2022(Cryptosuite):
    """
    EdDSA over Ed25519, with the signing input built from URDNA2015
    canonical N-Quads and SHA-256.
    """
    cryptosuite = "eddsa-rdfc-2022"
    keypair_class = Ed25519Multikey

    @classmethod
    def sign_data(cls, data, keypair):
        return keypair.sign(data)

    @classmethod
    def verify_data(cls, data, signature, keypair):
        return keypair.verify(data, signature)


class EcdsaRdfc2019(Cryptosuite):
    """
    ECDSA over P-256 with SHA-256.  Signatures are the 64 byte r || s
    encoding.
    """
    cryptosuite = "ecdsa-rdfc-2019"
    keypair_class = P256Multikey

    @classmethod
    def sign_data(cls, data, keypair):
        return keypair.sign(data)

    @classmethod
    def verify_data(cls, data, signature, keypair):
        return keypair.verify(data, signature)


register_suite(EddsaRdfc2022)
register_suite(EcdsaRdfc2019)
