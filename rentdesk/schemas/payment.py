from pydantic import BaseModel


class PaymentOrderRequest(BaseModel):
    amount: float | None = None


class PaymentOrderResponse(BaseModel):
    id: str
    amount: int  # minor units (paise)
    currency: str
    receipt: str
    status: str
