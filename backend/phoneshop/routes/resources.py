# Overview: Flask API routes shared by every key-value resource; list/get/create/update/delete.

"""
Generic resource routes.

Every resource type gets the same five endpoints:

    GET    /<resource>          -> {success, data: [records]}
    GET    /<resource>/<id>     -> {success, data: record} | 404
    POST   /<resource>          -> {success, data: record}   (id assigned if absent)
    PUT    /<resource>/<id>     -> {success, data: record}   (overwrite)
    DELETE /<resource>/<id>     -> {success}                 (absent id is a no-op)

Resources with side effects pass their own service functions for the
write endpoints; the HTTP shape stays identical.
"""

from __future__ import annotations

from typing import Callable

from flask import Blueprint

from ..decorators import api_endpoint, json_body
from ..services import resource_service
from ..services.resource_service import (
    CATEGORIES,
    CUSTOMER_REQUESTS,
    EXPENSES,
    PHONE_STOCKS,
    ResourceType,
)


def make_resource_blueprint(
    resource: ResourceType,
    *,
    list_records: Callable[[], list] | None = None,
    create: Callable[[dict], dict] | None = None,
    update: Callable[[str, dict], dict] | None = None,
    delete: Callable[[str], None] | None = None,
) -> Blueprint:
    """Build the blueprint for one resource, with optional service overrides."""
    bp = Blueprint(resource.name.replace("-", "_"), __name__, url_prefix=f"/{resource.name}")
    label = resource.label.lower()

    do_list = list_records or (lambda: resource_service.list_records(resource))
    do_create = create or (lambda payload: resource_service.create_record(resource, payload))
    do_update = update or (lambda record_id, payload: resource_service.update_record(resource, record_id, payload))
    do_delete = delete or (lambda record_id: resource_service.delete_record(resource, record_id))

    @bp.get("")
    @api_endpoint(f"list {label} records")
    def list_route():
        return do_list()

    @bp.get("/<record_id>")
    @api_endpoint(f"fetch {label}")
    def get_route(record_id: str):
        return resource_service.get_record(resource, record_id)

    @bp.post("")
    @api_endpoint(f"create {label}")
    def create_route():
        return do_create(json_body())

    @bp.put("/<record_id>")
    @api_endpoint(f"update {label}")
    def update_route(record_id: str):
        return do_update(record_id, json_body())

    @bp.delete("/<record_id>")
    @api_endpoint(f"delete {label}")
    def delete_route(record_id: str):
        do_delete(record_id)
        return None

    return bp


categories_bp = make_resource_blueprint(CATEGORIES)
expenses_bp = make_resource_blueprint(EXPENSES)
customer_requests_bp = make_resource_blueprint(CUSTOMER_REQUESTS)
phone_stocks_bp = make_resource_blueprint(PHONE_STOCKS)
