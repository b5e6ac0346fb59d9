## Runtime settings for document loading and proof handling.
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

import logging
import os
from datetime import timedelta

logger = logging.getLogger(__name__)

ENVIRONMENT_PREFIX = "PYLD_INTEGRITY_"


def _as_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _as_timedelta(value):
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=float(value))


class Settings:
    class Loader:
        # Without this, only the built-in contexts and caller supplied
        # documents can be loaded.
        allow_network = False
        timeout = 10
        accept = "application/ld+json, application/json;q=0.5"

    class Proof:
        default_cryptosuite = "eddsa-rdfc-2022"
        expiry_warning_window = timedelta(days=1)

    def __init__(self):
        self.load()

    def load(self, overrides=None):
        """
        Apply PYLD_INTEGRITY_* environment variables, then OVERRIDES (a
        mapping of the same setting names without the prefix).
        """
        ATTRS = {
            "LOADER_ALLOW_NETWORK": (self.Loader, "allow_network", _as_bool),
            "LOADER_TIMEOUT": (self.Loader, "timeout", float),
            "LOADER_ACCEPT": (self.Loader, "accept", str),
            "DEFAULT_CRYPTOSUITE": (self.Proof, "default_cryptosuite", str),
            "EXPIRY_WARNING_WINDOW": (
                self.Proof, "expiry_warning_window", _as_timedelta),
        }
        user_settings = {
            key[len(ENVIRONMENT_PREFIX):]: value
            for key, value in os.environ.items()
            if key.startswith(ENVIRONMENT_PREFIX)}
        user_settings.update(overrides or {})

        for setting, value in user_settings.items():
            logger.debug("setting %s -> %s", setting, value)
            if setting not in ATTRS:
                logger.warning(
                    "Ignoring %s as it is not a pyld-integrity setting",
                    setting)
                continue

            setting_class, attr, convert = ATTRS[setting]
            setattr(setting_class, attr, convert(value))


settings = Settings()


def configure(**overrides):
    settings.load(overrides)
