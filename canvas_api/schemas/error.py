# canvas_api/schemas/error.py
from typing import List
from pydantic import BaseModel


class FieldErrorDetail(BaseModel):
    field: str
    reason: str
    detail: str


class ErrorResponse(BaseModel):
    errors: List[FieldErrorDetail]
