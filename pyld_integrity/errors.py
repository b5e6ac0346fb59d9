## Exceptions raised while creating and verifying Data Integrity proofs.
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

class DataIntegrityError(Exception): pass
class DataIntegrityTypeError(DataIntegrityError, TypeError): pass


# Keypairs

class KeypairError(DataIntegrityError): pass
class InitializationError(KeypairError, ValueError): pass
class ExportError(KeypairError): pass
class ContextMismatchError(KeypairError): pass
class RevokedKeyError(KeypairError): pass


# Document loading

class LoaderError(DataIntegrityError):
    def __init__(self, message, url=None):
        super().__init__(message)
        self.url = url

class NetworkConnectionError(LoaderError): pass
class DocumentNotFoundError(LoaderError): pass
class LoaderTimeoutError(LoaderError): pass


# Verification method and controller resolution

class ResolutionError(DataIntegrityError): pass
class ControllerNotFoundError(ResolutionError): pass
class MethodNotFoundError(ResolutionError): pass


# Protocol misuse

class CanonicalizationError(DataIntegrityError): pass
class MissingPurposeError(DataIntegrityTypeError): pass
class MissingProofError(DataIntegrityError): pass
class UnsupportedSuiteError(DataIntegrityError): pass
class SuiteNotImplementedError(DataIntegrityError, NotImplementedError): pass


# These never escape verify_proof(); they are collected into the
# result's "errors" list.

class ProofVerificationError(DataIntegrityError): pass
class ProofExpiredError(ProofVerificationError): pass
