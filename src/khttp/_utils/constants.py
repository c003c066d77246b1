# Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONNECTION = "Connection"
HEADER_CONTENT_LENGTH = "Content-Length"
HEADER_CONTENT_TYPE = "Content-Type"

CONTENT_TYPE_JSON = "application/json"

# Descriptor defaults
DEFAULT_METHOD = "GET"
DEFAULT_PROTOCOL = "http"
DEFAULT_HOSTNAME = "localhost"
DEFAULT_PATH = "/"
DEFAULT_ENCODING = "utf-8"

# Error codes
ERROR_CONNECT_TIMEOUT = "ETIMEDOUT"
ERROR_SOCKET_TIMEOUT = "ESOCKETTIMEDOUT"
ERROR_ABORTED = "ECONNRESET"

# Environment
ENV_DEFAULT_ENCODING = "KHTTP_DEFAULT_ENCODING"
ENV_DEFAULT_TIMEOUT = "KHTTP_DEFAULT_TIMEOUT"
ENV_ALLOW_DUPLICATE_CALLBACKS = "KHTTP_ALLOW_DUPLICATE_CALLBACKS"
ENV_SSL_CERT_FILE = "SSL_CERT_FILE"
ENV_REQUESTS_CA_BUNDLE = "REQUESTS_CA_BUNDLE"
ENV_SSL_CERT_DIR = "SSL_CERT_DIR"
