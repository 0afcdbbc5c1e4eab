import json
import secrets
from dataclasses import dataclass
from typing import Optional

from flask import Flask, Response, request
from pydantic import TypeAdapter, ValidationError
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from .config import Config
from .constants import (
    ALL_METHODS,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_TEXT,
    MAX_BODY_SIZE,
    RESPONSE_HEALTHY,
    RESPONSE_INTERNAL_ERROR,
    RESPONSE_INVALID_JSON,
    RESPONSE_METHOD_NOT_ALLOWED,
    RESPONSE_OK,
    RESPONSE_ROOT_ERROR,
    RESPONSE_UNAUTHORIZED,
    SEND_FAILURE_ERROR,
    SEND_TIMEOUT,
    TEST_API_TOKEN,
)
from .formatters import MessageBuilder, build_pushover_message, create_pushover_message, extract_alert_info, validate_alert
from .models import FluxAlert
from .ports import Logger, NotificationSender
from .services import PushoverClient, create_optimized_session

# "null" no corpo vira None e é barrado por validate_alert
_ALERT_ADAPTER = TypeAdapter(Optional[FluxAlert])


@dataclass
class HandlerDependencies:
    config: Config
    pushover_client: NotificationSender
    logger: Logger
    message_builder: MessageBuilder = build_pushover_message


def create_server_dependencies(cfg: Config, logger: Logger) -> HandlerDependencies:
    client = PushoverClient(create_optimized_session(), cfg.pushover_url)
    return HandlerDependencies(
        config=cfg,
        pushover_client=client,
        logger=logger,
        message_builder=build_pushover_message,
    )


def json_response(body, status: int) -> Response:
    return Response(body, status=status, content_type=CONTENT_TYPE_JSON)


def text_response(body, status: int) -> Response:
    return Response(body, status=status, mimetype=CONTENT_TYPE_TEXT)


def _is_authorized(header: str, bearer_token: str) -> bool:
    return secrets.compare_digest(header.encode("utf-8"), bearer_token.encode("utf-8"))


def create_app(deps: HandlerDependencies) -> Flask:
    app = Flask(__name__)
    # corpo acima do limite é rejeitado durante a leitura
    app.config['MAX_CONTENT_LENGTH'] = MAX_BODY_SIZE

    @app.route('/', defaults={'path': ''}, methods=ALL_METHODS, provide_automatic_options=False)
    @app.route('/<path:path>', methods=ALL_METHODS, provide_automatic_options=False)
    def root(path):
        return text_response(RESPONSE_ROOT_ERROR, 400)

    @app.route('/health', methods=ALL_METHODS, provide_automatic_options=False)
    def health():
        return text_response(RESPONSE_HEALTHY, 200)

    @app.route('/webhook', methods=ALL_METHODS, provide_automatic_options=False)
    def webhook():
        # preflight de CORS
        if request.method == 'OPTIONS':
            return Response(status=200)

        if request.method != 'POST':
            deps.logger.info('invalid_method', method=request.method, remote_addr=request.remote_addr)
            return json_response(RESPONSE_METHOD_NOT_ALLOWED, 405)

        if not _is_authorized(request.headers.get('Authorization', ''), deps.config.bearer_token):
            deps.logger.info('unauthorized_request', remote_addr=request.remote_addr)
            return json_response(RESPONSE_UNAUTHORIZED, 401)

        try:
            raw = request.get_data(cache=False)
        except RequestEntityTooLarge:
            deps.logger.info('request_body_too_large', remote_addr=request.remote_addr, limit=MAX_BODY_SIZE)
            return json_response(RESPONSE_INVALID_JSON, 400)

        try:
            alert = _ALERT_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            deps.logger.info('invalid_json', error=str(exc), remote_addr=request.remote_addr)
            return json_response(RESPONSE_INVALID_JSON, 400)

        try:
            validate_alert(alert)
        except ValueError as exc:
            deps.logger.info('invalid_alert', error=str(exc))
            return json_response(RESPONSE_INVALID_JSON, 400)

        message = deps.message_builder(alert)

        if deps.config.pushover_api_token == TEST_API_TOKEN:
            deps.logger.info('test_mode_skip_send')
            return json_response(RESPONSE_OK, 200)

        pushover_msg = create_pushover_message(deps.config, message)
        try:
            deps.pushover_client.send_message(pushover_msg, timeout=SEND_TIMEOUT)
        except Exception as exc:
            deps.logger.error('pushover_send_failed', error=str(exc))
            body = json.dumps({'error': SEND_FAILURE_ERROR, 'details': str(exc)})
            return json_response(body, 500)

        info = extract_alert_info(alert)
        deps.logger.info('alert_sent', kind=info['kind'], name=info['name'], namespace=info['namespace'])
        return json_response(RESPONSE_OK, 200)

    @app.errorhandler(Exception)
    def unexpected_error(exc):
        if isinstance(exc, HTTPException):
            return exc
        deps.logger.error('unhandled_error', error=str(exc), exc_info=True)
        return json_response(RESPONSE_INTERNAL_ERROR, 500)

    return app
