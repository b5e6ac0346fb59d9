## Document loaders: URL -> RemoteDocument resolution for pyld.
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

import requests

from . import contexts
from .errors import (
    DocumentNotFoundError, LoaderTimeoutError, NetworkConnectionError)
from .settings import settings

logger = logging.getLogger(__name__)


def _make_remote_document(url, doc, context_url=None):
    return {
        "contextUrl": context_url,
        "documentUrl": url,
        "document": doc}


class StaticResolver(object):
    """
    Resolve URLs out of a fixed url -> document mapping.

    Returns None for URLs it does not know so the next resolver in a
    LoaderChain gets a turn.  A URL carrying a fragment falls back to the
    document at the URL without it, so "did:example:123#key-1" is served
    from the "did:example:123" document.
    """
    def __init__(self, url_map):
        self._url_map = url_map

    def __call__(self, url, options=None):
        doc = self._url_map.get(url)
        if doc is None and "#" in url:
            doc = self._url_map.get(url.split("#", 1)[0])
        if doc is None:
            return None
        if isinstance(doc, str):
            doc = json.loads(doc)
        return _make_remote_document(url, copy.deepcopy(doc))


builtin_resolver = StaticResolver(contexts.BUILTIN_CONTEXTS)


class LoaderChain(object):
    """
    An ordered list of resolvers, tried in sequence.

    Each resolver is called as resolver(url, options) and either returns a
    RemoteDocument, returns None to pass, or raises a LoaderError which
    ends the lookup.  Instances are themselves pyld document loaders.
    """
    def __init__(self, resolvers):
        self.resolvers = tuple(resolvers)

    def __call__(self, url, options=None):
        for resolver in self.resolvers:
            remote_doc = resolver(url, options)
            if remote_doc is not None:
                return remote_doc
        raise DocumentNotFoundError(
            "No resolver in the loader chain could load %s" % url, url=url)


def network_loader(url, options=None):
    """
    Fetch URL over HTTP(S).

    Raises LoaderTimeoutError when the request exceeds the configured
    timeout and NetworkConnectionError on any other fetch or parse failure.
    """
    logger.debug("Fetching %s", url)
    try:
        response = requests.get(
            url,
            headers={"Accept": settings.Loader.accept},
            timeout=settings.Loader.timeout)
        response.raise_for_status()
        document = response.json()
    except requests.Timeout as e:
        logger.warning("Timed out fetching %s", url)
        raise LoaderTimeoutError(
            "Timed out fetching the resource from %s: %s" % (url, e),
            url=url) from e
    except (requests.RequestException, ValueError) as e:
        logger.warning("Failed to fetch %s: %s", url, e)
        raise NetworkConnectionError(
            "Failed to fetch the resource from %s: %s" % (url, e),
            url=url) from e
    return _make_remote_document(url, document)


def fallback_loader(url, options=None):
    raise DocumentNotFoundError(
        ("No custom loader was provided and the document associated with "
         "the given URL was not found: %s") % url, url=url)


def extend(loader):
    """
    Put the built-in context table in front of LOADER.

    Context URLs known to this library never reach LOADER.
    """
    return LoaderChain([builtin_resolver, loader])


basic_loader = extend(fallback_loader)


def make_simple_loader(url_map, load_unknown_urls=False):
    """
    Build a loader serving the documents in URL_MAP (plus the built-in
    contexts).  Unknown URLs go to the network if LOAD_UNKNOWN_URLS is
    set, and fail with DocumentNotFoundError otherwise.
    """
    return LoaderChain([
        builtin_resolver,
        StaticResolver(dict(url_map)),
        network_loader if load_unknown_urls else fallback_loader])


def default_loader():
    if settings.Loader.allow_network:
        return extend(network_loader)
    return basic_loader


def get_loader(options):
    """
    Pick the loader for an operation: options["documentLoader"] behind the
    built-in contexts, or the default loader.
    """
    loader = options.get("documentLoader")
    if loader is None:
        return default_loader()
    if (isinstance(loader, LoaderChain)
            and builtin_resolver in loader.resolvers):
        return loader
    return extend(loader)
