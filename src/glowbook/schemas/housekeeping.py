from pydantic import BaseModel


class CompletedResponse(BaseModel):
    completed: int


class ReconcileResponse(BaseModel):
    cancelled_appointment_ids: list[str]
