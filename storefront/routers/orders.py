# storefront/routers/orders.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.database import get_session
from storefront.repositories.order_repo import OrderRepository
from storefront.schemas.order import OrderCreate, OrderHistory
from storefront.schemas.user import MessageResponse
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/order", tags=["Orders"])

order_repo = OrderRepository()
service = OrderService(order_repo)


@router.post("/place-order", response_model=MessageResponse)
def place_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
):
    """
    Store an order snapshot of the items the client checked out.
    """
    return service.place_order(session, payload)


@router.get("/history/{user_id}", response_model=OrderHistory)
def order_history(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    List a user's orders (oldest first) with their items.
    """
    return service.history(session, user_id)
