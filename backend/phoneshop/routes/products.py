# Overview: Flask API routes for products; CRUD plus bulk import, search and low-stock listing.

from flask import jsonify, request

from .resources import make_resource_blueprint
from ..decorators import api_endpoint, json_body
from ..services import products_service
from ..services.resource_service import PRODUCTS
from ..validation import require_list

products_bp = make_resource_blueprint(PRODUCTS)


@products_bp.post("/bulk")
@api_endpoint("bulk import products")
def bulk_import_products():
    """
    Body: {"products": [...]}. Products are written one by one; a failure
    part-way leaves the earlier ones in place.
    """
    products = require_list(json_body(), "products")
    created = products_service.bulk_create_products(products)
    return jsonify({"success": True, "data": created, "count": len(created)})


@products_bp.get("/search")
@api_endpoint("search products")
def search_products():
    return products_service.search_products(request.args.get("q"))


@products_bp.get("/low-stock")
@api_endpoint("list low-stock products")
def low_stock_products():
    return products_service.list_low_stock_products()
