from ._body_codec import EncodedBody, decode_body, encode_body, prepare_body
from ._errors import error_code, format_error
from ._request_spec import (
    OPTION_KEYS,
    Options,
    OptionsLike,
    RequestOptions,
    copy_headers,
    merge_options,
    normalize_options,
)

__all__ = [
    "EncodedBody",
    "OPTION_KEYS",
    "Options",
    "OptionsLike",
    "RequestOptions",
    "copy_headers",
    "decode_body",
    "encode_body",
    "error_code",
    "format_error",
    "merge_options",
    "normalize_options",
    "prepare_body",
]
