from typing import Any, Optional

from ._services import RequestController
from ._services._request_controller import Callback
from ._utils import OptionsLike, merge_options, normalize_options


def request(
    options: OptionsLike,
    body: Any = None,
    callback: Optional[Callback] = None,
    **extra: Any,
) -> RequestController:
    """Start an HTTP request and return its live handle.

    Must be called from a running event loop. ``options`` is a URL string or
    an options record; ``extra`` keyword options are merged on top of it.
    ``body``, when given, takes precedence over ``options["body"]``.

    The outcome is delivered exactly once, to ``callback(error, response,
    body)`` if given, and to anyone awaiting the returned handle::

        error, response, body = await khttp.request("http://localhost/ping", json=True)

    Raises:
        TypeError: for unknown option names.
        RuntimeError: if no event loop is running.
    """
    if extra:
        options = merge_options(merge_options({}, options), extra)
    return RequestController(normalize_options(options), body, callback).start()


def _with_method(method: str):
    def call(
        options: OptionsLike,
        body: Any = None,
        callback: Optional[Callback] = None,
        **extra: Any,
    ) -> RequestController:
        return request(options, body, callback, **{**extra, "method": method})

    call.__name__ = method.lower()
    call.__qualname__ = method.lower()
    call.__doc__ = f"Shortcut for :func:`request` with ``method={method!r}``."
    return call


get = _with_method("GET")
head = _with_method("HEAD")
post = _with_method("POST")
put = _with_method("PUT")
patch = _with_method("PATCH")
delete = _with_method("DELETE")
