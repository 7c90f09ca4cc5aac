"""
Customer management routes
"""

from fastapi import APIRouter, Depends, Path, Request
import structlog

from crm.customer_service.models.customer import CustomerCreate
from crm.customer_service.utils.database import CustomerDatabase
from crm.customer_service.utils.validators import validate_customer_create
from crm.shared.utils.errors import BadRequestError, NotFoundError
from crm.shared.utils.responses import empty_response, json_response
from crm.shared.utils.timing import ServerTiming
from crm.shared.utils.validators import INT64_MAX, INT64_MIN, parse_json_body

logger = structlog.get_logger(__name__)

router = APIRouter()


def get_database(request: Request) -> CustomerDatabase:
    """Dependency to get database instance"""
    return request.app.state.db


@router.get("/ping")
async def ping_database(db: CustomerDatabase = Depends(get_database)):
    """Probe pool acquire and query latency"""
    timing = ServerTiming()
    await db.ping(timing)

    return json_response(
        200,
        {
            "status": "ok",
            "conn_ms": round(timing.get("conn") or 0.0, 3),
            "query_ms": round(timing.get("query") or 0.0, 3),
        },
        timing,
    )


@router.get("")
async def list_customers(db: CustomerDatabase = Depends(get_database)):
    """List all customers"""
    timing = ServerTiming()
    customers = await db.list_customers(timing)
    return json_response(200, [customer.to_dict() for customer in customers], timing)


@router.post("")
async def create_customer(request: Request, db: CustomerDatabase = Depends(get_database)):
    """Create a new customer"""
    data = parse_json_body(await request.body(), CustomerCreate)

    errors = validate_customer_create(data)
    if errors:
        logger.warning("Customer creation validation failed", error=errors[0])
        raise BadRequestError(errors[0])

    timing = ServerTiming()
    customer = await db.create_customer(data.name, data.email, timing)
    return json_response(201, customer.to_dict(), timing)


@router.get("/{customer_id}")
async def get_customer(
    customer_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    db: CustomerDatabase = Depends(get_database),
):
    """Get customer details"""
    timing = ServerTiming()
    customer = await db.get_customer(customer_id, timing)
    if not customer:
        raise NotFoundError("Customer not found")

    return json_response(200, customer.to_dict(), timing)


@router.delete("/{customer_id}")
async def delete_customer(
    customer_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    db: CustomerDatabase = Depends(get_database),
):
    """Delete customer"""
    timing = ServerTiming()
    deleted = await db.delete_customer(customer_id, timing)
    if not deleted:
        raise NotFoundError("Customer not found")

    return empty_response(204, timing)
