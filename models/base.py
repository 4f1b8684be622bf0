"""Gemeinsame Basisklasse für Eingabedatensätze (Pydantic v2).

Die Host-Anwendung liefert camelCase-JSON (``timetableSlotId``); intern wird
snake_case verwendet. Beide Schreibweisen werden akzeptiert.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Unveränderlicher Eingabedatensatz mit camelCase-Aliasen."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )
