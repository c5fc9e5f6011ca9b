# Overview: Flask API routes for customers and their debt/credit ledger (cari).

from flask import Blueprint, request

from .resources import make_resource_blueprint
from ..decorators import api_endpoint, json_body
from ..services import customer_service
from ..services.resource_service import CUSTOMERS

customers_bp = make_resource_blueprint(CUSTOMERS)

customer_transactions_bp = Blueprint("customer_transactions", __name__, url_prefix="/customer-transactions")


@customer_transactions_bp.get("")
@api_endpoint("list customer transactions")
def list_customer_transactions():
    """Optional ?customerId= narrows the ledger to one customer."""
    return customer_service.list_transactions(request.args.get("customerId"))


@customer_transactions_bp.post("")
@api_endpoint("post customer transaction")
def post_customer_transaction():
    """
    Body: {customerId, type, amount, description}.

    type is one of debt, credit, payment_received, payment_made.
    Returns 404 when the customer does not exist.
    """
    return customer_service.post_transaction(json_body())
