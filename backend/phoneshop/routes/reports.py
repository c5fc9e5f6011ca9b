from flask import Blueprint, request

from ..decorators import api_endpoint
from ..services import reporting_service


reports_bp = Blueprint("reports", __name__, url_prefix="/reports")


@reports_bp.get("/summary")
@api_endpoint("generate report")
def sales_summary():
    """?period=daily|weekly|monthly|all (default daily)."""
    return reporting_service.sales_summary(request.args.get("period"))


@reports_bp.get("/dashboard")
@api_endpoint("generate dashboard report")
def dashboard():
    return reporting_service.dashboard_report(
        start=request.args.get("start"),
        end=request.args.get("end"),
    )


@reports_bp.get("/customers")
@api_endpoint("generate customer report")
def customers_report():
    return reporting_service.customer_report()


@reports_bp.get("/stock-value")
@api_endpoint("generate stock value report")
def stock_value():
    return reporting_service.stock_value_report()
