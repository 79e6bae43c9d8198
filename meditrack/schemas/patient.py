"""
Pydantic schemas for patient entry.
"""
from pydantic import BaseModel, ConfigDict, Field

from meditrack.models.patient import Patient
from meditrack.schemas.validators import DelimitedText


class PatientCreate(BaseModel):
    """Schema for registering a new patient.

    Names and contact details are stored in a ``|``-delimited file by the
    flat-file backend, so neither may contain that character or a newline.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "John Doe",
                "age": 54,
                "contact": "555-0134"
            }
        },
    )

    name: DelimitedText = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Patient full name",
        examples=["John Doe"]
    )
    age: int = Field(
        ...,
        ge=0,
        le=150,
        description="Age in years",
        examples=[54]
    )
    contact: DelimitedText = Field(
        "",
        max_length=200,
        description="Free-text contact information",
        examples=["555-0134"]
    )

    def to_model(self) -> Patient:
        return Patient(name=self.name, age=self.age, contact=self.contact)
