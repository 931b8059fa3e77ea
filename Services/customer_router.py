# Services/customer_router.py
from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, constr, conint
from typing import List

from Models import Customer
from Services.rental_system import RentalSystem
from storage import get_rental_system

router = APIRouter()

class CustomerBase(BaseModel):
    customer_id: conint(ge=0)
    customer_name: constr(min_length=1, max_length=100)

class CustomerCreate(CustomerBase):
    pass

class CustomerResponse(CustomerBase):
    model_config = ConfigDict(from_attributes=True)

@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer: CustomerCreate,
    system: RentalSystem = Depends(get_rental_system)
):
    db_customer = Customer(**customer.model_dump())
    if not system.add_customer(db_customer):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Customer with ID {db_customer.customer_id} already exists"
        )
    return CustomerResponse.model_validate(db_customer)

@router.get("/list", response_model=List[CustomerResponse])
async def list_customers(
    system: RentalSystem = Depends(get_rental_system)
):
    return [CustomerResponse.model_validate(c) for c in system.customers]

@router.get("/table", response_class=PlainTextResponse)
async def customer_table(
    system: RentalSystem = Depends(get_rental_system)
):
    return system.display_all_customers()

@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: str,
    system: RentalSystem = Depends(get_rental_system)
):
    try:
        customer = system.find_customer_by_id(customer_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Customer ID must be numeric"
        )
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )
    return CustomerResponse.model_validate(customer)
