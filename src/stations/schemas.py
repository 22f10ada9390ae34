from pydantic import BaseModel, field_validator

class StationBase(BaseModel):
    name: str

class StationCreate(StationBase):
    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name required")
        return value

class Station(StationBase):
    id: int

    class Config:
        from_attributes = True
