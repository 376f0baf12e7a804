"""Account Schemas — Pydantic models for remote customer payloads and API responses.

Invariants:
    - Remote payloads are camelCase; Python attributes are snake_case (alias generator)
    - Customer.addresses is a flat ordered list (GraphQL edges/node flattened on input)
    - Models are read-only views; the customer is never cached server-side

Design Decisions:
    - populate_by_name=True: tests and services can build models with snake_case kwargs
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _RemoteModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )


class CustomerUserError(_RemoteModel):
    """One entry of a mutation's customerUserErrors list."""
    code: str | None = None
    field: list[str] | None = None
    message: str = ""


class Address(_RemoteModel):
    id: str
    formatted: list[str] = Field(default_factory=list)
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    province: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None


class Customer(_RemoteModel):
    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    default_address: Address | None = None
    addresses: list[Address] = Field(default_factory=list)

    @field_validator("addresses", mode="before")
    @classmethod
    def flatten_connection(cls, v):
        """Accept a GraphQL connection ({edges: [{node}]}, {nodes: []}) or a plain list."""
        if v is None:
            return []
        if isinstance(v, dict):
            if "nodes" in v:
                return v["nodes"] or []
            return [edge["node"] for edge in v.get("edges") or []]
        return v

    def is_default(self, address: Address) -> bool:
        return (
            self.default_address is not None
            and self.default_address.id.split("?", 1)[0] == address.id.split("?", 1)[0]
        )


# --- Response payloads --------------------------------------------------------

class FormErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    form_error: str = Field(alias="formError")


class FieldErrorsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    field_errors: dict[str, str] = Field(alias="fieldErrors")


class AddressView(BaseModel):
    """Address as shown in the account page and edit form."""
    address: Address | None
    requested_id: str
    is_new: bool
    is_default: bool = False


class AccountView(BaseModel):
    """Account page payload: profile summary plus ordered address book."""
    display_name: str
    email: str | None
    phone: str | None
    addresses: list[Address]
    default_address_id: str | None
