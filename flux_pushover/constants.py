# Valores fixos do bridge. Nada aqui lê o ambiente: a configuração de runtime
# fica em config.Config e é carregada uma única vez no entrypoint.

DEFAULT_PORT = "8080"
DEFAULT_PUSHOVER_URL = "https://api.pushover.net/1/messages.json"

# Nomes das variáveis de ambiente
ENV_USER_KEY = "PUSHOVER_USER_KEY"
ENV_API_TOKEN = "PUSHOVER_API_TOKEN"
ENV_PORT = "PORT"
ENV_PUSHOVER_URL = "PUSHOVER_URL"
ENV_DEBUG_MODE = "DEBUG_MODE"
ENV_LOG_FORMAT = "LOG_FORMAT"

# Defaults de formatação da mensagem
DEFAULT_SEVERITY = "INFO"
DEFAULT_VALUE = "Unknown"
DEFAULT_NAMESPACE = "default"
NO_MESSAGE = "No Message"
APP_TITLE = "FluxCD"

# Token que desliga o envio real (testes de integração)
TEST_API_TOKEN = "test_api_token"

# HTTP
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
CONTENT_TYPE_TEXT = "text/plain"
BEARER_PREFIX = "Bearer "
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]

# Servidor (segundos / bytes)
READ_TIMEOUT = 10
WRITE_TIMEOUT = 10
SHUTDOWN_TIMEOUT = 30
SEND_TIMEOUT = 10
CONNECT_TIMEOUT = 5
MAX_BODY_SIZE = 1 << 20  # 1 MiB
ERROR_BODY_EXCERPT = 512

# Pool de conexões do cliente Pushover
POOL_CONNECTIONS = 10
POOL_MAXSIZE = 2

# Respostas pré-definidas
RESPONSE_OK = b'{"status": "ok"}'
RESPONSE_UNAUTHORIZED = b'{"error": "Unauthorized"}'
RESPONSE_INVALID_JSON = b'{"error": "Invalid JSON"}'
RESPONSE_METHOD_NOT_ALLOWED = b'{"error": "Method not allowed"}'
RESPONSE_INTERNAL_ERROR = b'{"error": "Internal server error"}'
RESPONSE_ROOT_ERROR = b"Requests need to be made to /webhook"
RESPONSE_HEALTHY = b"healthy"
SEND_FAILURE_ERROR = "Failed to send to Pushover"
