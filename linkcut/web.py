"""HTTP interface: request models, controllers, middleware and routes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from flask import Flask, jsonify, redirect, request

from .domain import LinkExpiredError, LinkNotFoundError
from .service import LinkService

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class ShortLink:
    """Body of a link-shortening request."""

    link: str
    ttl: int

    @classmethod
    def from_json(cls, data: Any) -> "ShortLink":
        """Validate a decoded JSON body; raise ValueError if it is unusable."""
        if not isinstance(data, dict):
            raise ValueError("request body must be a JSON object")
        link = data.get("link")
        ttl = data.get("ttl")
        if link is not None and not isinstance(link, str):
            raise ValueError("link must be a string")
        if ttl is not None and (isinstance(ttl, bool) or not isinstance(ttl, int)):
            raise ValueError("ttl must be an integer")
        if ttl is not None and not _INT64_MIN <= ttl <= _INT64_MAX:
            raise ValueError("ttl is out of range")
        if not link:
            raise ValueError("link is required")
        if not ttl:
            raise ValueError("ttl is required")
        return cls(link=link, ttl=ttl)


class LinkController:
    """Handlers for creating and following short links."""

    def __init__(self, link_service: LinkService) -> None:
        self.link_service = link_service

    def gen_link(self):
        """Create a short link from the JSON body."""
        try:
            body = ShortLink.from_json(request.get_json(force=True, silent=True))
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=body.ttl)
        except (ValueError, OverflowError):
            return jsonify(msg="Invalid request body"), 400
        try:
            new_hash = self.link_service.generate_link(body.link, expires_at)
        except Exception:
            return jsonify(msg="Error while generating hash"), 500
        return jsonify(new_hash=new_hash), 200

    def redirect(self, hash: str):
        """Redirect to the URL stored under ``hash``."""
        try:
            url = self.link_service.get_link(hash)
        except LinkNotFoundError as exc:
            return jsonify(msg=str(exc)), 404
        except LinkExpiredError as exc:
            return jsonify(msg=str(exc)), 410
        except Exception:
            return jsonify(msg="Unknown error"), 500
        return redirect(url, code=307)


class ServiceController:
    """Operational endpoints."""

    def health_check(self):
        """Report that the service is up."""
        return jsonify(msg="Healthy"), 200


class LoggingMiddleware:
    """Logs every incoming request."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def log(self) -> None:
        """Log method, matched route pattern and client address."""
        rule = request.url_rule
        self.logger.info(
            "Request",
            extra={
                "method": request.method,
                "path": rule.rule if rule is not None else "",
                "ip": request.remote_addr or "",
            },
        )


def register_routes(
    app: Flask,
    link_controller: LinkController,
    service_controller: ServiceController,
    logging_middleware: LoggingMiddleware,
) -> None:
    """Attach the middleware and all API routes to ``app``."""
    app.before_request(logging_middleware.log)
    api = "/api"
    links = f"{api}/links"
    service = f"{api}/service"
    app.add_url_rule(f"{links}/cut", "gen_link", link_controller.gen_link, methods=["POST"])
    app.add_url_rule(
        f"{links}/r/<hash>", "redirect", link_controller.redirect, methods=["GET"]
    )
    app.add_url_rule(
        f"{service}/health", "health_check", service_controller.health_check, methods=["GET"]
    )


def create_app(link_service: LinkService, logger: logging.Logger) -> Flask:
    """Build the web application around ``link_service``."""
    app = Flask("linkcut")
    register_routes(
        app,
        LinkController(link_service),
        ServiceController(),
        LoggingMiddleware(logger),
    )
    return app