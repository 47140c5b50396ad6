"""Request/response schemas for the book catalog."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BookCreate(BaseModel):
    """Body for creating a book."""

    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")


class BookUpdate(BaseModel):
    """
    Body for updating a book. Both fields are always written; an omitted
    field replaces the stored value with an empty string.
    """

    title: str = Field(default="", description="New title")
    author: str = Field(default="", description="New author")


class BookOut(BaseModel):
    """A stored book; the identifier is serialized as _id."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(
        ...,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
        description="Store-generated identifier",
    )
    title: str
    author: str


class BookMutationResponse(BaseModel):
    """Response for create and update: message plus the stored book."""

    message: str
    book: BookOut
