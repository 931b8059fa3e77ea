# Models/customer.py
from pydantic import BaseModel, ConfigDict


class Customer(BaseModel):
    model_config = ConfigDict(frozen=True)

    customer_id: int
    customer_name: str

    def __str__(self):
        return f"Customer #{self.customer_id}: {self.customer_name}"
