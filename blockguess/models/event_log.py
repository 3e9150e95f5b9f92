from pydantic import BaseModel


class LogEvent(BaseModel):
    """Entrada del log de auditoría (solo se agrega, nunca se lee para lógica)"""

    log_id: int
    event_type: str  # round_created | guess_submitted | round_finished | ...
    details: str
    timestamp: int

    class Config:
        populate_by_name = True
