from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.booking import BookingMetadata, BookingRequest


class BookingMetadataSchema(BaseModel):
    service: str
    price: str
    duration: str


class BookRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start: str
    email: str
    name: str
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    metadata: BookingMetadataSchema

    def to_domain(self) -> BookingRequest:
        return BookingRequest(
            start=self.start,
            name=self.name,
            email=self.email,
            phone_number=self.phone_number or None,
            metadata=BookingMetadata(
                service=self.metadata.service,
                price=self.metadata.price,
                duration=self.metadata.duration,
            ),
        )


class ChatMessageSchema(BaseModel):
    role: Literal["user", "assistant"] = "user"
    content: str = ""


class ChatRequestSchema(BaseModel):
    messages: list[ChatMessageSchema] = Field(min_length=1)
