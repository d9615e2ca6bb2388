# Contact form backend
# Validates contact form submissions and relays them as email via Resend.
# Runs as a Flask app (/api/contact) or as a serverless function (handler).

import base64
import json
import logging
import os

from flask import Flask, request, jsonify
from flask_cors import CORS

from contact_form import (
    METHOD_NOT_ALLOWED,
    CONFIG_INCOMPLETE,
    SERVER_ERROR,
    parse_body,
    normalize_submission,
    validate_submission,
    compose_mail,
)
from mail_client import load_config, send_mail

# Set up logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(message)s')

JSON_HEADERS = {'Content-Type': 'application/json; charset=utf-8'}


def process_contact_request(method, body, config, session=None, base64_body=False):
    """Run a request through gate, validation, composition and delivery.

    Always returns a ``Success`` or ``Failure``; exceptions raised after the
    gate are logged and reported as a generic server error. ``base64_body``
    marks a body that still needs base64 decoding.
    """
    if (method or '').upper() != 'POST':
        return METHOD_NOT_ALLOWED

    missing = config.missing_keys()
    if missing:
        logging.error(f'Missing env vars: {missing}')
        return CONFIG_INCOMPLETE

    try:
        if base64_body and body:
            body = base64.b64decode(body, validate=True)
        submission = normalize_submission(parse_body(body))
        failure = validate_submission(submission)
        if failure:
            return failure
        mail = compose_mail(submission)
        result = send_mail(config, mail, reply_to=submission.email, session=session)
        if result.ok:
            logging.info('Contact form submission relayed')
        return result
    except Exception as e:
        logging.exception(f'Function error: {e}')
        return SERVER_ERROR


# --- SERVERLESS ENTRY POINT ---
def handler(event, context=None, config=None):
    result = process_contact_request(
        event.get('httpMethod'),
        event.get('body'),
        config or load_config(),
        base64_body=bool(event.get('isBase64Encoded')),
    )
    return {
        'statusCode': result.status,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(result.body()),
    }


# --- FLASK APP ---
app = Flask(__name__)
app.config['MAIL_CONFIG'] = load_config()
CORS(app)


@app.route('/api/contact', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
def contact():
    result = process_contact_request(
        request.method,
        request.get_data(),
        app.config['MAIL_CONFIG'],
    )
    return jsonify(result.body()), result.status


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
