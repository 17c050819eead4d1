from pydantic import BaseModel, ConfigDict


class SerdeBase(BaseModel):
    """Base for JSON request and response bodies.

    Unknown fields are rejected so a typo in a client surfaces as a 400
    instead of being silently dropped.
    """

    model_config = ConfigDict(extra="forbid")
