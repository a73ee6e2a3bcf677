"""
User Service - owns the user fixtures.
Exposes /health, /metrics, /users and /users/<id>.
"""
import logging
import time

from flask import Flask, jsonify
from prometheus_client import CollectorRegistry

from storefront.errors import ResourceNotFound
from storefront.instrumentation import HttpMetrics, instrument
from storefront.logs import configure_logging
from storefront.models import User
from storefront.web import parse_id, register_common, run

SERVICE_NAME = "user-service"

logger = logging.getLogger(__name__)

USERS = (
    User(id=1, name="John Doe", email="john@example.com"),
    User(id=2, name="Jane Smith", email="jane@example.com"),
    User(id=3, name="Bob Johnson", email="bob@example.com"),
)


class UserNotFoundError(ResourceNotFound):
    message = "User not found"


def create_app(registry=None, users=USERS, list_delay=0.05):
    app = Flask(__name__)
    if registry is None:
        registry = CollectorRegistry()
    instrument(app, HttpMetrics(registry))
    register_common(app, SERVICE_NAME, registry)

    @app.route("/users")
    def list_users():
        logger.info("GET /users - returning %d users", len(users))
        if list_delay:
            time.sleep(list_delay)
        return jsonify([u.to_dict() for u in users]), 200

    @app.route("/users/<user_id>")
    def get_user(user_id):
        uid = parse_id(user_id, "user")
        logger.info("GET /users/%d", uid)
        for user in users:
            if user.id == uid:
                return jsonify(user.to_dict()), 200
        logger.info("User %d not found", uid)
        raise UserNotFoundError()

    return app


def main():
    configure_logging()
    run(create_app(), SERVICE_NAME)


if __name__ == "__main__":
    main()
