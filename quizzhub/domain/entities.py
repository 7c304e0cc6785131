from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# --- Literals ---
SortOrder = Literal["asc", "desc"]


class WireModel(BaseModel):
    """Base for records exchanged with the backend (camelCase on the wire)."""

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="allow",
    )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


# --- Users ---

class User(WireModel):
    id: str
    display_name: str | None = Field(default=None, alias="displayName")


# --- Quizz ---

class CommentRecord(WireModel):
    id: str | None = None
    text: str
    author_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("authorId", "userId", "author_id"),
        serialization_alias="authorId",
    )
    quizz_id: str | None = Field(default=None, alias="quizzId")


class Quizz(WireModel):
    id: str
    name: str = ""
    description: str = ""
    owner_id: str | None = Field(default=None, alias="ownerId")
    # True while the current user can still like it, False once liked.
    # None when the backend did not send the flag. Same polarity for realise.
    like: bool | None = None
    like_id: str | None = Field(default=None, alias="likeId")
    realise: bool | None = None
    realise_id: str | None = Field(default=None, alias="realiseId")
    hidden: bool = Field(default=False, alias="cache")
    comments: list[CommentRecord] = Field(default_factory=list)


class JoinRecord(WireModel):
    """Server-side like or completion record linking a user to a quizz."""

    id: str


# A cache entry is normally a Quizz; a CommentRecord only ends up at the top
# level through QuizzStore.add_comment.
CacheEntry = Quizz | CommentRecord
