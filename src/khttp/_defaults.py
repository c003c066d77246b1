from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from ._api import request as _request
from ._services import RequestController
from ._services._request_controller import Callback
from ._utils import OptionsLike, merge_options

RequestFunction = Callable[..., RequestController]


class Caller:
    """A request function bound to a base options record.

    The base is frozen at construction; each call merges it with the call's
    options into a fresh record, so a relative ``url`` such as ``"/users"``
    is appended to the base URL and base headers can be dropped per call by
    setting them to None.
    """

    def __init__(self, base: OptionsLike, request: RequestFunction = _request) -> None:
        frozen = merge_options({}, base)
        if "headers" in frozen:
            frozen["headers"] = MappingProxyType(frozen["headers"])
        self._base: Mapping[str, Any] = MappingProxyType(frozen)
        self._request = request

    @property
    def base(self) -> Mapping[str, Any]:
        return self._base

    def options(self, options: Optional[OptionsLike] = None, **extra: Any) -> dict[str, Any]:
        merged = merge_options({}, self._base)
        if options is not None:
            merge_options(merged, options)
        return merge_options(merged, extra)

    def request(
        self,
        options: Optional[OptionsLike] = None,
        body: Any = None,
        callback: Optional[Callback] = None,
        **extra: Any,
    ) -> RequestController:
        return self._request(self.options(options, **extra), body, callback)

    def get(self, options=None, body=None, callback=None, **extra) -> RequestController:
        return self.request(options, body, callback, **{**extra, "method": "GET"})

    def head(self, options=None, body=None, callback=None, **extra) -> RequestController:
        return self.request(options, body, callback, **{**extra, "method": "HEAD"})

    def post(self, options=None, body=None, callback=None, **extra) -> RequestController:
        return self.request(options, body, callback, **{**extra, "method": "POST"})

    def put(self, options=None, body=None, callback=None, **extra) -> RequestController:
        return self.request(options, body, callback, **{**extra, "method": "PUT"})

    def patch(self, options=None, body=None, callback=None, **extra) -> RequestController:
        return self.request(options, body, callback, **{**extra, "method": "PATCH"})

    def delete(self, options=None, body=None, callback=None, **extra) -> RequestController:
        return self.request(options, body, callback, **{**extra, "method": "DELETE"})

    def defaults(self, options: OptionsLike) -> "Caller":
        """Return a new Caller whose base is this one's merged with ``options``."""
        return Caller(self.options(options), self._request)


def defaults(base: OptionsLike, request: RequestFunction = _request) -> Caller:
    """Build a preconfigured caller around ``base``."""
    return Caller(base, request)
