"""
Order management routes
"""

from fastapi import APIRouter, Depends, Path, Request

from crm.order_service.models.order import OrderCreate
from crm.order_service.services.order_service import CustomerVerifier, OrderCreator
from crm.order_service.utils.database import OrderDatabase
from crm.shared.utils.errors import NotFoundError
from crm.shared.utils.responses import json_response
from crm.shared.utils.timing import ServerTiming
from crm.shared.utils.validators import INT64_MAX, INT64_MIN, parse_json_body

router = APIRouter()


def get_database(request: Request) -> OrderDatabase:
    """Dependency to get database instance"""
    return request.app.state.db


def get_customer_verifier(request: Request) -> CustomerVerifier:
    """Dependency to get the customer existence check"""
    return request.app.state.customer_client


def get_order_creator(
    verifier: CustomerVerifier = Depends(get_customer_verifier),
    db: OrderDatabase = Depends(get_database),
) -> OrderCreator:
    return OrderCreator(verifier, db)


@router.get("")
async def list_orders(db: OrderDatabase = Depends(get_database)):
    """List all orders"""
    timing = ServerTiming()
    orders = await db.list_orders(timing)
    return json_response(200, [order.to_dict() for order in orders], timing)


@router.post("")
async def create_order(request: Request, creator: OrderCreator = Depends(get_order_creator)):
    """Create an order after confirming the customer exists"""
    data = parse_json_body(await request.body(), OrderCreate)

    timing = ServerTiming()
    order = await creator.create(data, timing)
    return json_response(201, order.to_dict(), timing)


@router.get("/{order_id}")
async def get_order(
    order_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX),
    db: OrderDatabase = Depends(get_database),
):
    """Get order details"""
    timing = ServerTiming()
    order = await db.get_order(order_id, timing)
    if not order:
        raise NotFoundError("Order not found")

    return json_response(200, order.to_dict(), timing)
