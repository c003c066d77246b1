import os
import ssl
from functools import lru_cache
from typing import Any

import certifi

from .constants import ENV_REQUESTS_CA_BUNDLE, ENV_SSL_CERT_DIR, ENV_SSL_CERT_FILE


def expand_path(path):
    """Expand environment variables and user home directory in path."""
    if not path:
        return path
    path = os.path.expandvars(path)
    path = os.path.expanduser(path)
    return path


@lru_cache(maxsize=1)
def create_ssl_context() -> ssl.SSLContext:
    ssl_cert_file = expand_path(os.environ.get(ENV_SSL_CERT_FILE))
    requests_ca_bundle = expand_path(os.environ.get(ENV_REQUESTS_CA_BUNDLE))
    ssl_cert_dir = expand_path(os.environ.get(ENV_SSL_CERT_DIR))

    return ssl.create_default_context(
        cafile=ssl_cert_file or requests_ca_bundle or certifi.where(),
        capath=ssl_cert_dir,
    )


def get_httpx_client_kwargs() -> dict[str, Any]:
    """Keyword arguments for the one-shot client used when no agent is given.

    Timing is owned by the request controller, so httpx's own timeouts are
    off. Redirects are returned to the caller as-is.
    """
    return {
        "verify": create_ssl_context(),
        "timeout": None,
        "follow_redirects": False,
    }
