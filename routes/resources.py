import logging

from flask import Blueprint, current_app, jsonify, request

from errors import NotFoundError, failure_message, parse
from models import GOALS, SAVINGS, SUBSCRIPTIONS, TRANSACTIONS

logger = logging.getLogger(__name__)


def resource_blueprint(resource):
    bp = Blueprint(resource.name, __name__, url_prefix=f'/api/{resource.name}')
    noun = resource.label.lower()
    plural = resource.name if resource.name != 'savings' else 'savings accounts'

    def repo():
        return current_app.storage[resource.name]

    @bp.route('', methods=['GET'])
    @failure_message(f"Failed to fetch {plural}")
    def index():
        return jsonify([item.to_json() for item in repo().list()])

    @bp.route('/<id>', methods=['GET'])
    @failure_message(f"Failed to fetch {noun}")
    def show(id):
        item = repo().get(id)
        if item is None:
            raise NotFoundError(resource.label)
        return jsonify(item.to_json())

    @bp.route('', methods=['POST'])
    @failure_message(f"Failed to create {noun}")
    def create():
        data = parse(resource.create_model, request.get_json(silent=True))
        item = repo().create(data)
        logger.info("Created %s %s", noun, item.id)
        return jsonify(item.to_json()), 201

    @bp.route('/<id>', methods=['PUT'])
    @failure_message(f"Failed to update {noun}")
    def update(id):
        data = parse(resource.update_model, request.get_json(silent=True))
        item = repo().update(id, data)
        if item is None:
            raise NotFoundError(resource.label)
        logger.info("Updated %s %s", noun, id)
        return jsonify(item.to_json())

    @bp.route('/<id>', methods=['DELETE'])
    @failure_message(f"Failed to delete {noun}")
    def delete(id):
        if not repo().delete(id):
            raise NotFoundError(resource.label)
        logger.info("Deleted %s %s", noun, id)
        return jsonify(message=f"{resource.label} deleted successfully")

    return bp


subscriptions_bp = resource_blueprint(SUBSCRIPTIONS)
transactions_bp = resource_blueprint(TRANSACTIONS)
savings_bp = resource_blueprint(SAVINGS)
goals_bp = resource_blueprint(GOALS)
