from flask import Blueprint, current_app, jsonify, request, session

from errors import ValidationError, failure_message
from presentation import CURRENCIES, CURRENCY_BY_CODE, get_currency

settings_bp = Blueprint('settings', __name__, url_prefix='/api')

# the preference lives in the signed session cookie, never on entity rows
CURRENCY_KEY = 'currency'


def _check_currency(code):
    if code not in CURRENCY_BY_CODE:
        raise ValidationError([{
            "field": "currency",
            "message": f"Unsupported currency: {code}",
            "type": "currency",
        }])
    return code


def current_currency():
    code = request.args.get('currency')
    if code:
        return _check_currency(code)
    return session.get(CURRENCY_KEY) or current_app.config.get('DEFAULT_CURRENCY', 'USD')


@settings_bp.route('/currencies')
def currencies():
    return jsonify([c._asdict() for c in CURRENCIES])


@settings_bp.route('/settings/currency', methods=['GET'])
def currency_preference():
    code = current_currency()
    currency = get_currency(code)
    return jsonify(currency=code, symbol=currency.symbol, name=currency.name)


@settings_bp.route('/settings/currency', methods=['PUT'])
@failure_message("Failed to update currency")
def update_currency_preference():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    code = _check_currency(data.get('currency'))
    session[CURRENCY_KEY] = code
    currency = get_currency(code)
    return jsonify(currency=code, symbol=currency.symbol, name=currency.name)
