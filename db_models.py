from pydantic import BaseModel, field_validator
from typing import Optional, List



class IdentifyRequest(BaseModel):
    email: Optional[str] = None
    phoneNumber: Optional[str] = None

    @field_validator("phoneNumber", mode="before")
    @classmethod
    def phone_as_string(cls, value):
        # clients often post the number unquoted
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

class ContactResponse(BaseModel):
    primaryContactId: int
    emails: List[str]
    phoneNumbers: List[str]
    secondaryContactIds: List[int]

    @classmethod
    def from_cluster(cls, primary_id: int, contacts: List[dict]) -> "ContactResponse":
        """Build the response from a cluster listed primary first."""
        emails = []
        phone_numbers = []
        secondary_ids = []

        for contact in contacts:
            if contact['email'] and contact['email'] not in emails:
                emails.append(contact['email'])
            if contact['phoneNumber'] and contact['phoneNumber'] not in phone_numbers:
                phone_numbers.append(contact['phoneNumber'])
            if contact['id'] != primary_id:
                secondary_ids.append(contact['id'])

        return cls(
            primaryContactId=primary_id,
            emails=emails,
            phoneNumbers=phone_numbers,
            secondaryContactIds=secondary_ids
        )

class FinalResponse(BaseModel):
    contact: ContactResponse
