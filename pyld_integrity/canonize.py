## Canonicalization and controller/verification method framing over pyld.
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
import logging

from pyld import jsonld

from . import contexts
from .errors import (
    CanonicalizationError, ControllerNotFoundError, DocumentNotFoundError,
    LoaderError, MethodNotFoundError)
from .loader import fallback_loader

logger = logging.getLogger(__name__)

_get_values = jsonld.JsonLdProcessor.get_values


def _loader_error_from(error):
    # pyld wraps whatever the document loader raised, sometimes several
    # levels deep.
    seen = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        if isinstance(error, LoaderError):
            return error
        error = (getattr(error, "cause", None) or error.__cause__
                 or error.__context__)
    return None


def _jsonld_call(operation, *args):
    try:
        return operation(*args)
    except jsonld.JsonLdError as e:
        loader_error = _loader_error_from(e)
        if loader_error is not None:
            raise loader_error from e
        raise CanonicalizationError(str(e)) from e


def canonicalize(document, options):
    return _jsonld_call(jsonld.normalize, document, options).encode("utf-8")


def canonicalize_document(document, loader, skip_expansion=False):
    """
    Canonicalize DOCUMENT with URDNA2015 into N-Quads bytes.

    SKIP_EXPANSION declares that DOCUMENT is already in expanded form; it
    then carries no contexts and nothing may be loaded on its behalf.
    """
    if skip_expansion:
        loader = fallback_loader
    return canonicalize(document, {
        "algorithm": "URDNA2015",
        "format": "application/n-quads",
        "documentLoader": loader})


def canonicalize_proof_options(proof, loader):
    """
    Canonicalize a proof node as proof options.

    The node is read under the fixed proof context, and "nonce" and
    "proofValue" are dropped before canonicalization: proofValue is the
    output of signing and cannot be part of its input.
    """
    proof = copy.deepcopy(proof)
    proof["@context"] = list(contexts.PROOF_CONTEXT)
    proof.pop("nonce", None)
    proof.pop("proofValue", None)
    return canonicalize(proof, {
        "algorithm": "URDNA2015",
        "format": "application/n-quads",
        "documentLoader": loader})


def document_declares_context(document, context_url):
    """
    Check whether CONTEXT_URL is in DOCUMENT's @context, either as the
    whole value or as one member of it.
    """
    declared = document.get("@context")
    if declared == context_url:
        return True
    elif isinstance(declared, (list, tuple)):
        return context_url in declared
    return False


def node_id(value):
    """
    Get the identifier out of a node reference, which may be either a plain
    IRI string or an (embedded) node object.
    """
    if isinstance(value, dict):
        return value.get("id") or value.get("@id")
    return value


def _find_node(framed, identifier):
    if framed is None:
        return None
    if "@graph" in framed:
        candidates = _get_values(framed, "@graph")
    else:
        candidates = [framed]
    for candidate in candidates:
        if isinstance(candidate, dict) and node_id(candidate) == identifier:
            return candidate
    return None


def load_controller_document(controller_id, loader):
    try:
        return loader(controller_id, {})["document"]
    except DocumentNotFoundError as e:
        raise ControllerNotFoundError(
            "Controller %s could not be loaded." % controller_id) from e


def resolve_controller_claim(document, controller_id, relationship,
                             verification_method_id, loader):
    """
    Confirm that the controller document lists VERIFICATION_METHOD_ID under
    RELATIONSHIP (eg "assertionMethod") on the node CONTROLLER_ID.

    RELATIONSHIP must be one of contexts.VERIFICATION_RELATIONSHIPS.
    Returns the framed controller node, or raises ControllerNotFoundError.
    Only a reference to the method is required, so embedding is off for
    the relationship.
    """
    if (not isinstance(relationship, str)
            or relationship not in contexts.VERIFICATION_RELATIONSHIPS):
        raise ControllerNotFoundError(
            "%r is not a verification relationship." % (relationship,))

    frame = {
        "@context": list(contexts.PROOF_CONTEXT),
        "id": controller_id,
        relationship: {
            "@embed": "@never",
            "id": verification_method_id}}
    try:
        framed = _jsonld_call(jsonld.frame, document, frame, {
            "documentLoader": loader,
            "base": ""})
    except (DocumentNotFoundError, CanonicalizationError) as e:
        raise ControllerNotFoundError(
            "Controller document for %s could not be framed: %s" % (
                controller_id, e)) from e

    controller = _find_node(framed, controller_id)
    if controller is None:
        raise ControllerNotFoundError(
            "Controller %s not found." % controller_id)

    # Framing matches on the @id alone when nothing else does, so the
    # relationship itself has to be checked on the result.
    authorized = [node_id(value)
                  for value in _get_values(controller, relationship)]
    if verification_method_id not in authorized:
        raise ControllerNotFoundError(
            "Controller %s does not authorize %s for %s." % (
                controller_id, verification_method_id, relationship))

    framed_controller = dict(controller)
    framed_controller.setdefault("@context", framed.get("@context"))
    return framed_controller


def resolve_verification_method(method_id, loader):
    """
    Load and frame the verification method METHOD_ID with full embedding,
    returning the complete key description.
    """
    frame = {
        "@context": list(contexts.PROOF_CONTEXT),
        "@embed": "@always",
        "id": method_id}
    try:
        # pyld compacts ids relative to the base, which defaults to the
        # input URL.
        framed = _jsonld_call(jsonld.frame, method_id, frame, {
            "documentLoader": loader,
            "base": "",
            "expandContext": list(contexts.PROOF_CONTEXT)})
    except (DocumentNotFoundError, CanonicalizationError) as e:
        raise MethodNotFoundError(
            "Verification method %s not found: %s" % (method_id, e)) from e

    method = _find_node(framed, method_id)
    if method is None:
        raise MethodNotFoundError(
            "Verification method %s not found." % method_id)

    method = dict(method)
    method.setdefault("@context", framed.get("@context"))
    logger.debug("Resolved verification method %s", method_id)
    return method
