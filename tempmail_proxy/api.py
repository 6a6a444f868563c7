# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .errors import TempMailError

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "GET /api/generate": "Generate a disposable address. Returns {'address', 'token', 'sessionId', 'domain', 'provider', 'expiresAt'}",
    "GET /api/messages?token=YOUR_TOKEN": "List inbox messages, newest first (alias: /api/inbox)",
    "GET /api/messages/<id>?token=YOUR_TOKEN": "Read one message with text and html bodies",
    "DELETE /api/messages/<id>?token=YOUR_TOKEN": "Delete a message where the provider supports it",
    "GET /api/domains": "List available domains",
    "GET /api/status?token=YOUR_TOKEN": "Check whether a token is still valid",
    "GET /api/health": "Process and session diagnostics",
    "GET /api/memory": "Memory usage details",
}


def _token():
    return request.args.get('token') or request.args.get('sessionId')


def create_app(service):
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = service.settings.max_body_size
    app.extensions['tempmail'] = service
    CORS(app)

    @app.errorhandler(TempMailError)
    def handle_tempmail_error(error):
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if error.code is None or error.code < 400:
            return error
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500

    @app.route('/')
    def root():
        return jsonify({
            "api_name": "TempMail Proxy API",
            "info": "Disposable email addresses backed by public mail providers.",
            "endpoints": ENDPOINTS,
        })

    @app.route('/healthz')
    def healthz():
        return 'OK', 200, {'Content-Type': 'text/plain'}

    @app.route('/api/generate')
    def generate_mail():
        return jsonify(service.generate())

    @app.route('/api/messages')
    @app.route('/api/inbox')
    def check_mail():
        return jsonify(service.check_messages(_token()))

    @app.route('/api/messages/<message_id>', methods=['GET'])
    def read_mail(message_id):
        return jsonify(service.read_message(_token(), message_id))

    @app.route('/api/messages/<message_id>', methods=['DELETE'])
    def delete_mail(message_id):
        return jsonify(service.delete_message(_token(), message_id))

    @app.route('/api/domains')
    def domains():
        return jsonify(service.list_domains())

    @app.route('/api/status')
    def status():
        return jsonify(service.status(_token()))

    @app.route('/api/health')
    def health():
        return jsonify(service.health())

    @app.route('/api/memory')
    def memory():
        return jsonify(service.memory())

    return app
